""" Tag statistics gathered across a range of daily reports """

from __future__ import annotations

import datetime
from typing import Iterator

from worklog import utils
from worklog.base import Layout
from worklog.report import Report, ReportEntry, try_load
from worklog.utils import log


class ReportStatistics():
    """
    Tag statistics for the given date range

    All reports between ``since`` and ``until`` (both inclusive) are
    loaded and tag counts of all their entries summed up. Days without
    a report file are skipped. A report with an invalid header or with
    a header date which does not match the file aborts the whole
    aggregation, the error is propagated to the caller.
    """

    def __init__(
            self,
            since: datetime.date,
            until: datetime.date,
            layout: Layout):
        self.since = since
        self.until = until
        self.layout = layout
        self._tags: dict[str, int] = {}
        self._todos: list[tuple[datetime.date, ReportEntry]] = []
        self._found = 0
        self._calculate()

    def reports(self) -> Iterator[Report]:
        """ Available reports in the date range, oldest first """
        for date in utils.daterange(self.since, self.until):
            result = try_load(date, self.layout)
            if not result.found:
                log.debug("No report for %s, skipping", date)
                continue
            yield result.report

    def _calculate(self) -> None:
        """ Sum up tag counts of all entries """
        for report in self.reports():
            self._found += 1
            for entry in report.entries:
                for tag, count in entry.tags.items():
                    self._tags[tag] = self._tags.get(tag, 0) + count
                if entry.todo:
                    self._todos.append((report.date, entry))
        log.info(
            "Found %s with %s between %s and %s",
            utils.listed(self._found, "report"),
            utils.listed(self.total, "event"),
            self.since, self.until)

    @property
    def tags(self) -> dict[str, int]:
        """ Total counts per tag name """
        return dict(self._tags)

    @property
    def total(self) -> int:
        """ Total number of tag occurrences """
        return sum(self._tags.values())

    @property
    def reports_found(self) -> int:
        return self._found

    @property
    def todos(self) -> list[tuple[datetime.date, ReportEntry]]:
        """ Outstanding to-do entries with their report date """
        return list(self._todos)

    def count(self, tag: str) -> int:
        """ Total count for given tag, zero for unknown tags """
        return self._tags.get(tag, 0)

    def percent(self, tag: str) -> float:
        """ Share of the tag in all events """
        count = self.count(tag)
        if count == 0 or self.total == 0:
            return 0.0
        return 100.0 * count / self.total

    def ranking(self) -> list[tuple[str, int, float]]:
        """ Tags with their counts and percentages, most frequent first """
        ordered = sorted(self._tags.items(), key=lambda tag: (-tag[1], tag[0]))
        return [(tag, count, self.percent(tag)) for tag, count in ordered]

    def render(self) -> str:
        """ Human readable summary of the tag statistics """
        lines = [f"Events between {self.since} and {self.until}:"]
        for tag, count, percent in self.ranking():
            lines.append(f"    * {tag}: {count} ({percent:0.2f}%)")
        return "\n".join(lines)

    def render_todos(self, width: int = utils.MAX_WIDTH) -> str:
        """ List of outstanding to-do entries """
        lines = [f"To do items between {self.since} and {self.until}:"]
        for date, entry in self._todos:
            lines.append(utils.shorted(f"    * {date} {entry.text.strip()}", width))
        return "\n".join(lines)

    def __str__(self):
        return self.render()
