"""
Date helper utilities for form parsing, date derivation and display.

Provides reusable functions for parsing dates from forms and backend
responses, deriving the report/delivery dates of a pending record, and
formatting dates for the API and for the screens.

All dates cross the backend boundary as YYYY-MM-DD strings.
"""

from datetime import datetime, date, timedelta

API_DATE_FORMAT = "%Y-%m-%d"

# Proposed report is due 12 days after field work, delivery 5 days after that
REPORT_OFFSET_DAYS = 12
DELIVERY_OFFSET_DAYS = 5


def _parse_iso_date(text):
    """Strict YYYY-MM-DD: strptime alone accepts unpadded parts like 2024-6-1."""
    parsed = datetime.strptime(text, API_DATE_FORMAT).date()
    if parsed.strftime(API_DATE_FORMAT) != text:
        raise ValueError(f"Not a zero-padded YYYY-MM-DD date: {text}")
    return parsed


def parse_form_date(form, field_name, required=False, default=None):
    """
    Parse date from form with consistent error handling.

    Args:
        form: Flask request.form or dict-like object
        field_name: Name of the form field
        required: If True, raises ValueError if field is missing
        default: Default value if field is empty (only used if not required)

    Returns:
        date object or None (or default value)

    Raises:
        ValueError: If required and missing, or if date format is invalid

    Example:
        order_date = parse_form_date(request.form, "orderDate", default=date.today())
        fw_done_on = parse_form_date(request.form, "fwDoneOn", required=True)
    """
    value = form.get(field_name)

    if not value or (isinstance(value, str) and not value.strip()):
        if required:
            raise ValueError(f"{field_name} is required")
        return default

    if isinstance(value, str):
        value = value.strip()
        try:
            return _parse_iso_date(value)
        except ValueError as e:
            raise ValueError(
                f"Invalid date format for {field_name}: {value}. Expected YYYY-MM-DD"
            ) from e

    # datetime is a subclass of date, check it first
    if isinstance(value, datetime):
        return value.date()

    if isinstance(value, date):
        return value

    raise ValueError(f"Invalid type for {field_name}: {type(value)}")


def parse_api_date(value):
    """
    Parse a date coming from the backend or a form into a date object.

    Accepts date/datetime objects, YYYY-MM-DD strings and full ISO
    timestamps such as "2024-06-01T00:00:00.000Z". Returns None for
    empty or unparseable values instead of raising.
    """
    if value is None or value == "":
        return None

    if isinstance(value, datetime):
        return value.date()

    if isinstance(value, date):
        return value

    if not isinstance(value, str):
        return None

    text = value.strip()
    # Timestamps keep only their date part; anything else after it is garbage
    if len(text) > 10 and text[10] in "T ":
        text = text[:10]

    try:
        return _parse_iso_date(text)
    except ValueError:
        return None


def format_date_for_api(date_value):
    """
    Convert date/datetime to YYYY-MM-DD string for backend requests.

    Args:
        date_value: date, datetime, or string

    Returns:
        String in YYYY-MM-DD format, or None if input is None/empty

    Example:
        {
            "orderDate": format_date_for_api(record.orderDate),
            "fwDoneOn": format_date_for_api(record.fwDoneOn),
        }
    """
    if not date_value:
        return None

    # Already a string - return as-is
    if isinstance(date_value, str):
        return date_value

    if isinstance(date_value, (datetime, date)):
        return date_value.strftime(API_DATE_FORMAT)

    return str(date_value)


def to_form_date(value, default=None):
    """Reduce a backend date value to the YYYY-MM-DD string a date input expects."""
    parsed = parse_api_date(value)
    if parsed is None:
        return default
    return parsed.strftime(API_DATE_FORMAT)


def today_iso():
    """Today's date as YYYY-MM-DD."""
    return date.today().strftime(API_DATE_FORMAT)


def derive_dates(fw_done_on):
    """
    Compute the proposed report date and delivery date from the
    field-work-completion date.

    proposedReportDate is fw_done_on + 12 days and deliveryDate is
    proposedReportDate + 5 days. An empty or invalid fw_done_on yields
    empty strings for both; this never raises.

    Args:
        fw_done_on: date, datetime, or YYYY-MM-DD string

    Returns:
        dict with "proposedReportDate" and "deliveryDate" as YYYY-MM-DD
        strings (or "" when fw_done_on is not a valid date)

    Example:
        >>> derive_dates("2024-02-25")
        {'proposedReportDate': '2024-03-08', 'deliveryDate': '2024-03-13'}
    """
    fw_date = parse_api_date(fw_done_on)
    if fw_date is None:
        return {"proposedReportDate": "", "deliveryDate": ""}

    proposed_report_date = fw_date + timedelta(days=REPORT_OFFSET_DAYS)
    delivery_date = proposed_report_date + timedelta(days=DELIVERY_OFFSET_DAYS)

    return {
        "proposedReportDate": proposed_report_date.strftime(API_DATE_FORMAT),
        "deliveryDate": delivery_date.strftime(API_DATE_FORMAT),
    }


def format_short_date(value):
    """Format a date as dd-mm-yy for the pending works table."""
    if value is None:
        return "No date"

    parsed = parse_api_date(value)
    if parsed is None:
        return "Invalid date"

    return parsed.strftime("%d-%m-%y")


def format_schedule_date(value):
    """Format a date as e.g. '08 Mar 2024' for the weekly schedule."""
    parsed = parse_api_date(value)
    if parsed is None:
        return "-"
    return parsed.strftime("%d %b %Y")


def format_weekday(value):
    """Full weekday name of a date, e.g. 'Friday'."""
    parsed = parse_api_date(value)
    if parsed is None:
        return "-"
    return parsed.strftime("%A")
