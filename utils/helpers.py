from datetime import date

from utils.date_helpers import parse_api_date


def safe_date_sort_key(date_value):
    """Returns a sortable key for date values, handling None and bad strings."""
    parsed = parse_api_date(date_value)
    if parsed is None:
        return date.min
    return parsed


def sort_records_by_order_date(records):
    """Sort pending records by order date, earliest first.

    Records without a usable order date sort first. The sort is stable so
    ties keep the order the backend returned them in.
    """
    return sorted(records, key=lambda record: safe_date_sort_key(record.orderDate))


def next_sr_no(record_count):
    """Sequence number for a new record given how many records exist."""
    return int(record_count) + 1


def find_record(records, record_id):
    """Return the record with the given id, or None."""
    for record in records:
        if str(record.id) == str(record_id):
            return record
    return None
