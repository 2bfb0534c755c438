import csv
import io
from datetime import date, datetime, timezone as dt_timezone
from types import SimpleNamespace

from admin_app.services.export_service import (
    EXPORT_HEADERS,
    NOT_AVAILABLE,
    export_filename,
    export_row,
    format_export_line,
    write_registrations_csv,
)


def reg(name, **overrides):
    data = {
        "full_name": name,
        "mobile_number": "9847000001",
        "panchayath": SimpleNamespace(name="Athirampuzha"),
        "category": SimpleNamespace(name_english="Job Card"),
        "created_at": datetime(2026, 10, 1, 4, 30, tzinfo=dt_timezone.utc),
        "expiry_date": datetime(2026, 11, 15, 4, 30, tzinfo=dt_timezone.utc),
    }
    data.update(overrides)
    return SimpleNamespace(**data)


def test_export_filename():
    assert export_filename(date(2026, 10, 18)) == "registrations-export-2026-10-18.csv"


def test_export_row_formats_dates_in_local_time(settings):
    settings.TIME_ZONE = "Asia/Kolkata"
    # 20:00 UTC is already the next day in Kolkata
    registration = reg(
        "Anitha",
        created_at=datetime(2026, 10, 1, 20, 0, tzinfo=dt_timezone.utc),
    )

    assert export_row(registration) == [
        "Anitha",
        "9847000001",
        "Athirampuzha",
        "Job Card",
        "02/10/2026",
        "15/11/2026",
    ]


def test_export_row_fills_missing_values():
    registration = reg("Biju", panchayath=None, category=None, expiry_date=None)

    row = export_row(registration)

    assert row[2:4] == [NOT_AVAILABLE, NOT_AVAILABLE]
    assert row[5] == NOT_AVAILABLE


def test_csv_has_header_plus_one_line_per_registration():
    stream = io.StringIO()
    registrations = [reg("Anitha"), reg("Biju"), reg("Celine")]

    count = write_registrations_csv(stream, registrations)

    lines = stream.getvalue().splitlines()
    assert count == 3
    assert len(lines) == 4
    assert lines[0] == ",".join(EXPORT_HEADERS)


def test_csv_quotes_awkward_names():
    stream = io.StringIO()
    awkward = 'Thomas, "Biju" K'

    write_registrations_csv(stream, [reg(awkward)])

    parsed = list(csv.reader(io.StringIO(stream.getvalue())))
    assert parsed[1][0] == awkward
    assert len(parsed) == 2


def test_empty_export_is_header_only():
    stream = io.StringIO()

    assert write_registrations_csv(stream, []) == 0
    assert stream.getvalue() == ",".join(EXPORT_HEADERS) + "\n"


def test_text_columns_are_always_quoted():
    line = format_export_line(
        ["Anitha", "9847000001", "Athirampuzha", "Job Card", "01/10/2026", "N/A"]
    )

    assert line == '"Anitha",9847000001,"Athirampuzha","Job Card",01/10/2026,N/A'


def test_quotes_inside_text_columns_are_doubled():
    stream = io.StringIO()

    write_registrations_csv(
        stream,
        [reg('Thomas, "Biju" K', panchayath=None, expiry_date=None)],
    )

    row = stream.getvalue().splitlines()[1]
    assert row.startswith('"Thomas, ""Biju"" K",9847000001,"N/A","Job Card",')
    assert row.endswith(",N/A")
