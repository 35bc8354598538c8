# coding: utf-8
""" Tests for header & entry parsing and report loading """

import datetime

import pytest

import worklog.base
import worklog.report
from worklog.report import LoadStatus, Report, ReportEntry, ReportHeader

MAY_4 = datetime.date(2023, 5, 4)

# ~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~
#  Header
# ~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~


@pytest.mark.parametrize("year, month, day, location", [
    (2023, 5, 4, "Remote"),
    (1999, 12, 31, "Head Office, Brno"),
    (2024, 2, 29, "home (kitchen"),
    (2000, 1, 1, ""),
    ])
def test_header_round_trip(year, month, day, location):
    text = f"Activity Report {year:04d}-{month:02d}-{day:02d} ({location})"
    date, parsed = worklog.report.parse_header(text)
    assert date == datetime.date(year, month, day)
    assert parsed == location


def test_header_object():
    header = ReportHeader("Activity Report 2023-05-04 (Remote)\n")
    assert header.date == MAY_4
    assert header.location == "Remote"
    assert header.text == "Activity Report 2023-05-04 (Remote)\n"
    assert str(header) == header.text


def test_header_whitespace():
    for text in [
            "  Activity Report 2023-05-04 (Remote)",
            "Activity \t Report   2023-05-04   (Remote)  \n",
            "Activity Report 2023-05-04(Remote)",
            ]:
        assert worklog.report.parse_header(text) == (MAY_4, "Remote")


@pytest.mark.parametrize("text", [
    "",
    "\n",
    "Activity Report",
    "ActivityReport 2023-05-04 (Remote)",
    "Activity Report2023-05-04 (Remote)",
    "Activity Report 2023-5-4 (Remote)",
    "Activity Report 2023-05-04",
    "Activity Report 2023-05-04 (Remote) today",
    "Activity Report 2023-05-04 (Remote))",
    "Daily Report 2023-05-04 (Remote)",
    "Activity Report \u0662\u0660\u0662\u0663-\u0660\u0665-\u0660\u0664 (Remote)",
    ])
def test_header_no_match(text):
    with pytest.raises(worklog.base.HeaderParseError, match="Invalid report header"):
        worklog.report.parse_header(text)


@pytest.mark.parametrize("text", [
    "Activity Report 2023-13-01 (Remote)",
    "Activity Report 2023-02-30 (Remote)",
    "Activity Report 2023-02-29 (Remote)",
    "Activity Report 2023-00-10 (Remote)",
    ])
def test_header_invalid_date(text):
    with pytest.raises(worklog.base.HeaderParseError, match="Invalid date"):
        ReportHeader(text)


# ~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~
#  Entry
# ~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~

def test_entry_tags():
    entry = ReportEntry("[Foo][Foo][Bar]")
    assert entry.tags == {"Foo": 2, "Bar": 1}
    assert entry.tag_names == ["Foo", "Bar"]
    assert entry.count("Foo") == 2
    assert entry.count("Baz") == 0
    assert not entry.todo


def test_entry_tags_letters_only():
    entry = ReportEntry("[Ab] [ab] [A1] [a-b] [] [ x ] [[Nested]] [CamelCase]")
    assert entry.tags == {"Ab": 1, "ab": 1, "Nested": 1, "CamelCase": 1}


def test_entry_todo():
    assert ReportEntry("Write tests (TODO)").todo
    assert ReportEntry("(TODO) [Docs] (TODO)").todo
    assert not ReportEntry("Write tests (todo)").todo
    assert not ReportEntry("Write tests TODO").todo


def test_entry_without_tags():
    for text in ["", "Nothing to see here", "[not closed", "(Tag)"]:
        entry = ReportEntry(text)
        assert entry.tags == {}
        assert not entry.todo
        assert entry.text == text


def test_entry_tags_copy():
    entry = ReportEntry("[Foo]")
    entry.tags["Foo"] = 10
    assert entry.count("Foo") == 1


# ~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~
#  Report
# ~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~

def test_report_load(layout, write_report):
    filename = write_report(MAY_4, [
        "Reviewed patches [Storage][Review]",
        "",
        "Release notes [Docs] (TODO)",
        ], location="Remote")
    report = worklog.report.load_report(MAY_4, layout)
    assert report.date == MAY_4
    assert report.filename == filename
    assert filename.endswith("2023/05/20230504.report")
    assert report.header.date == MAY_4
    assert report.header.location == "Remote"
    assert [entry.text for entry in report.entries] == [
        "Reviewed patches [Storage][Review]",
        "",
        "Release notes [Docs] (TODO)",
        ]
    assert report.entries[0].tags == {"Storage": 1, "Review": 1}
    assert [entry.text for entry in report.todos] == [
        "Release notes [Docs] (TODO)"]


def test_report_header_only(layout, write_report):
    write_report(MAY_4)
    assert Report(MAY_4, layout).entries == ()


def test_report_missing(layout):
    with pytest.raises(worklog.base.ReportFileNotFoundError, match="No report file"):
        Report(MAY_4, layout)


def test_report_date_mismatch(layout, write_report):
    write_report(MAY_4, ["Work [Foo]"], header_date=datetime.date(2023, 5, 3))
    with pytest.raises(worklog.base.ReportDateMismatchError, match="2023-05-03"):
        Report(MAY_4, layout)


def test_report_invalid_header(layout, write_report):
    filename = write_report(MAY_4)
    with open(filename, "w", encoding="utf-8") as report:
        report.write("Just some notes [Foo]\n")
    with pytest.raises(worklog.base.HeaderParseError):
        Report(MAY_4, layout)


def test_report_empty_file(layout, write_report):
    filename = write_report(MAY_4)
    with open(filename, "w", encoding="utf-8"):
        pass
    with pytest.raises(worklog.base.HeaderParseError):
        Report(MAY_4, layout)


def test_report_undecodable_entry(layout, write_report):
    filename = write_report(MAY_4)
    with open(filename, "ab") as report:
        report.write(b"[A]\ncaf\xe9 [B]\n")
    report = Report(MAY_4, layout)
    assert [entry.tags for entry in report.entries] == [{"A": 1}, {"B": 1}]
    assert report.entries[1].text == "caf\ufffd [B]"


def test_report_undecodable_header(layout, write_report):
    filename = write_report(MAY_4)
    with open(filename, "wb") as report:
        report.write(b"Activity Report 2023-05-04 (Caf\xe9)\n[A]\n")
    assert Report(MAY_4, layout).header.location == "Caf\ufffd"

    with open(filename, "wb") as report:
        report.write(b"Activity\xff Report 2023-05-04 (Remote)\n")
    with pytest.raises(worklog.base.HeaderParseError):
        Report(MAY_4, layout)


def test_report_carriage_return(layout, write_report):
    filename = write_report(MAY_4)
    with open(filename, "ab") as report:
        report.write(b"First [A]\rstill first [B]\nSecond [C]\r\n")
    report = Report(MAY_4, layout)
    assert [entry.text for entry in report.entries] == [
        "First [A]\rstill first [B]",
        "Second [C]",
        ]


def test_report_requires_date(layout):
    with pytest.raises(TypeError):
        Report("2023-05-04", layout)
    with pytest.raises(TypeError):
        Report(datetime.datetime(2023, 5, 4, 12, 0), layout)


def test_try_load(layout, write_report):
    result = worklog.report.try_load(MAY_4, layout)
    assert result.status is LoadStatus.MISSING
    assert not result.found
    assert result.report is None

    write_report(MAY_4, ["[Foo]"])
    result = worklog.report.try_load(MAY_4, layout)
    assert result.status is LoadStatus.FOUND
    assert result.found
    assert result.report.entries[0].tags == {"Foo": 1}


def test_try_load_mismatch_raised(layout, write_report):
    write_report(MAY_4, header_date=datetime.date(2022, 5, 4))
    with pytest.raises(worklog.base.ReportDateMismatchError):
        worklog.report.try_load(MAY_4, layout)
