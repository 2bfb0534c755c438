import csv
import io

from django.utils import timezone

EXPORT_HEADERS = [
    "Name",
    "Mobile Number",
    "Panchayath",
    "Category",
    "Registered Date",
    "Expiry Date",
]

# Name, Panchayath and Category are quoted on every row
ALWAYS_QUOTED_COLUMNS = frozenset({0, 2, 3})

NOT_AVAILABLE = "N/A"


def export_filename(today=None):
    today = today or timezone.localdate()
    return f"registrations-export-{today:%Y-%m-%d}.csv"


def _format_date(value):
    if value is None:
        return NOT_AVAILABLE
    return f"{timezone.localtime(value):%d/%m/%Y}"


def export_row(registration):
    panchayath = registration.panchayath
    category = registration.category

    return [
        registration.full_name,
        registration.mobile_number,
        panchayath.name if panchayath else NOT_AVAILABLE,
        category.name_english if category else NOT_AVAILABLE,
        _format_date(registration.created_at),
        _format_date(registration.expiry_date),
    ]


def _cell(value, quoting):
    buffer = io.StringIO()
    csv.writer(buffer, quoting=quoting, lineterminator="").writerow([value])
    return buffer.getvalue()


def format_export_line(row):
    return ",".join(
        _cell(value, csv.QUOTE_ALL if index in ALWAYS_QUOTED_COLUMNS else csv.QUOTE_MINIMAL)
        for index, value in enumerate(row)
    )


def write_registrations_csv(stream, registrations):
    """
    Write the export sheet for `registrations` into a text stream
    (an HttpResponse works). Returns the number of data rows.
    """
    writer = csv.writer(stream, lineterminator="\n")
    writer.writerow(EXPORT_HEADERS)

    count = 0
    for registration in registrations:
        stream.write(format_export_line(export_row(registration)) + "\n")
        count += 1

    return count
