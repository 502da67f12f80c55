from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

from echo_veritas.infrastructure.export import CsvExporter, format_timestamp
from tests.fakes import make_result


def test_serialize_header_only_for_no_results():
    assert CsvExporter().serialize([]) == "Timestamp,Prediction,Confidence,Review Text"


def test_serialize_rows_in_given_order():
    results = [
        make_result("a", "fake", 0.875, text="Best product ever"),
        make_result("b", "real", 0.9, text="Decent, but loud"),
    ]
    assert CsvExporter().serialize(results).split("\n") == [
        "Timestamp,Prediction,Confidence,Review Text",
        '2026-10-19T09:15:02.417Z,fake,87.5%,"Best product ever"',
        '2026-10-19T09:15:02.417Z,real,90.0%,"Decent, but loud"',
    ]


def test_serialize_doubles_quotes():
    out = CsvExporter().serialize([make_result("a", text='She said "wow" twice "')])
    assert out.endswith(',"She said ""wow"" twice """')


def test_serialize_has_no_trailing_newline():
    assert not CsvExporter().serialize([make_result("a")]).endswith("\n")


def test_timestamp_is_normalised_to_utc():
    plus_two = timezone(timedelta(hours=2))
    ts = datetime(2026, 1, 2, 5, 6, 7, 89000, tzinfo=plus_two)
    assert format_timestamp(ts) == "2026-01-02T03:06:07.089Z"


def test_naive_timestamp_is_treated_as_utc():
    assert format_timestamp(datetime(2026, 1, 2, 3, 4, 5)) == "2026-01-02T03:04:05.000Z"


def test_filename_uses_date_only():
    assert CsvExporter().filename(date(2026, 10, 19)) == "review-analysis-2026-10-19.csv"
    assert CsvExporter("audit").filename(datetime(2026, 10, 19, 23, 59)) == "audit-2026-10-19.csv"
