# coding: utf-8

"""
Daily work log reports

Each day of work is described by a plain text report file. The first
line is the header holding the report date and the place where the
work was done::

    Activity Report 2023-05-04 (Remote)

All remaining lines are entries. An entry is free text which may
contain any number of ``[Tag]`` tokens (letters only) and the
``(TODO)`` marker for work which is not finished yet::

    Reviewed the storage patches [Storage][Review]
    Prepare the release notes [Docs] (TODO)
"""

from __future__ import annotations

import datetime
import enum
import os
import re
from typing import Optional

from worklog.base import (HeaderParseError, Layout, ReportDateMismatchError,
                          ReportFileNotFoundError)
from worklog.utils import log

HEADER_RE = re.compile(
    r"\s*Activity\s+Report\s+"
    r"(?P<year>[0-9]{4})-(?P<month>[0-9]{2})-(?P<day>[0-9]{2})"
    r"\s*\((?P<location>[^)]*)\)\s*")
TAG_RE = re.compile(r"\[([A-Za-z]+)\]")
TODO_MARKER = "(TODO)"


# ~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~
#  Parsers
# ~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~

def parse_header(text: str) -> tuple[datetime.date, str]:
    """ Extract the date and location from the report header line """
    matched = HEADER_RE.fullmatch(text)
    if matched is None:
        raise HeaderParseError(f"Invalid report header '{text.strip()}'.")
    try:
        date = datetime.date(
            int(matched.group("year")),
            int(matched.group("month")),
            int(matched.group("day")))
    except ValueError as error:
        raise HeaderParseError(
            f"Invalid date in report header '{text.strip()}': {error}."
            ) from error
    return date, matched.group("location")


def parse_entry(text: str) -> tuple[dict[str, int], bool]:
    """
    Extract tag counts and the to-do flag from an entry line

    Every line is a valid entry, lines without any tags simply give
    an empty mapping.
    """
    tags: dict[str, int] = {}
    for name in TAG_RE.findall(text):
        tags[name] = tags.get(name, 0) + 1
    return tags, TODO_MARKER in text


# ~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~
#  Header & Entry
# ~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~

class ReportHeader():
    """ Report header with the date and location """

    def __init__(self, text: str):
        self._text = text
        self._date, self._location = parse_header(text)

    @property
    def date(self) -> datetime.date:
        return self._date

    @property
    def location(self) -> str:
        return self._location

    @property
    def text(self) -> str:
        return self._text

    def __str__(self):
        return self._text

    def __repr__(self):
        return f"ReportHeader({self._text!r})"


class ReportEntry():
    """ Single line of the report """

    def __init__(self, text: str = ""):
        self._text = text
        self._tags, self._todo = parse_entry(text)

    @property
    def text(self) -> str:
        return self._text

    @property
    def tags(self) -> dict[str, int]:
        """ Tag counts, a copy so that the entry stays untouched """
        return dict(self._tags)

    @property
    def tag_names(self) -> list[str]:
        """ Names of tags present in the entry """
        return list(self._tags)

    @property
    def todo(self) -> bool:
        """ True if this entry is a to-do item """
        return self._todo

    def count(self, tag: str) -> int:
        """ Number of occurrences of given tag, zero for absent tags """
        return self._tags.get(tag, 0)

    def __str__(self):
        return self._text

    def __repr__(self):
        return f"ReportEntry({self._text!r})"


# ~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~
#  Report
# ~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~

class Report():
    """
    Work log report for a single day

    The report file is located using the provided layout, header date
    must match the requested date, otherwise the file is considered to
    be misplaced and ``ReportDateMismatchError`` is raised. Missing
    file is reported with ``ReportFileNotFoundError``.
    """

    def __init__(self, date: datetime.date, layout: Layout):
        if (not isinstance(date, datetime.date)
                or isinstance(date, datetime.datetime)):
            raise TypeError(f"Report date expected, got '{date!r}'.")
        self._date = date
        self._filename = layout.filename(date)
        if not os.path.exists(self._filename):
            raise ReportFileNotFoundError(
                f"No report file '{self._filename}' found for {date}.")
        log.debug("Reading report '%s'", self._filename)
        # Undecodable bytes are replaced, lines end with \n only
        with open(
                self._filename, encoding="utf-8", errors="replace",
                newline="\n") as report:
            self._header = ReportHeader(report.readline())
            if self._header.date != date:
                raise ReportDateMismatchError(
                    f"Report '{self._filename}' is dated "
                    f"{self._header.date} instead of {date}.")
            self._entries = tuple(
                ReportEntry(line.rstrip("\r\n")) for line in report)
        log.details(f"Loaded {len(self._entries)} entries for {date}")

    @property
    def date(self) -> datetime.date:
        return self._date

    @property
    def filename(self) -> str:
        return self._filename

    @property
    def header(self) -> ReportHeader:
        return self._header

    @property
    def entries(self) -> tuple[ReportEntry, ...]:
        return self._entries

    @property
    def todos(self) -> list[ReportEntry]:
        """ Entries marked as to-do items """
        return [entry for entry in self._entries if entry.todo]

    def __repr__(self):
        return f"Report({self._date!r}, {self._filename!r})"


# ~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~
#  Loading
# ~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~

class LoadStatus(enum.Enum):
    """ Outcome of a report lookup """
    FOUND = "found"
    MISSING = "missing"


class LoadResult():
    """ Report lookup result, the report is available only when found """

    def __init__(
            self,
            date: datetime.date,
            status: LoadStatus,
            report: Optional[Report] = None):
        self.date = date
        self.status = status
        self.report = report

    @property
    def found(self) -> bool:
        return self.status is LoadStatus.FOUND

    def __repr__(self):
        return f"LoadResult({self.date}, {self.status.name})"


def load_report(date: datetime.date, layout: Layout) -> Report:
    """ Load report for given date, raise if there is none """
    return Report(date, layout)


def try_load(date: datetime.date, layout: Layout) -> LoadResult:
    """
    Load report for given date, tolerate a missing file

    Missing report file is a common situation (weekends, holidays)
    and results in the ``MISSING`` status. Invalid header or header
    date mismatch are still raised.
    """
    try:
        report = load_report(date, layout)
    except ReportFileNotFoundError as error:
        log.debug(error)
        return LoadResult(date, LoadStatus.MISSING)
    return LoadResult(date, LoadStatus.FOUND, report)
