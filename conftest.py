import datetime
import os
from typing import Callable, Iterable, Optional

import pytest

import worklog.base


@pytest.fixture
def layout(tmp_path) -> worklog.base.Layout:
    """ Report layout rooted in a temporary directory """
    return worklog.base.Layout(str(tmp_path))


@pytest.fixture
def write_report(layout: worklog.base.Layout) -> Callable[..., str]:
    """ Create a report file for given date, return its path """

    def write(
            date: datetime.date,
            lines: Iterable[str] = (),
            header_date: Optional[datetime.date] = None,
            location: str = "Office") -> str:
        filename = layout.filename(date)
        os.makedirs(os.path.dirname(filename), exist_ok=True)
        header = f"Activity Report {header_date or date} ({location})"
        with open(filename, "w", encoding="utf-8") as report:
            report.write("\n".join([header, *lines]) + "\n")
        return filename

    return write


@pytest.fixture
def today(monkeypatch: pytest.MonkeyPatch) -> datetime.date:
    """ Pin today's date to a Saturday """
    date = datetime.date(2015, 10, 3)
    monkeypatch.setattr(worklog.base, "TODAY", date)
    return date
