"""
Validation utilities
"""
from datetime import datetime, timezone


def missing_fields(data, required):
    """
    List required fields that are absent or blank

    Args:
        data (dict): Request payload
        required (list): Field names

    Returns:
        list: Names of missing fields, in the order given
    """
    return [field for field in required if data.get(field) in (None, '')]


def parse_datetime(value):
    """
    Parse an ISO-8601 date or datetime string

    Date-only values become midnight UTC; naive datetimes are taken as UTC.

    Args:
        value (str): Date string

    Returns:
        datetime: Timezone-aware datetime or None if invalid
    """
    if not isinstance(value, str):
        return None
    text = value.strip()
    if text.endswith('Z'):
        text = text[:-1] + '+00:00'
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def validate_choice(value, choices):
    """
    Check value is one of the allowed choices

    Returns:
        bool: True if valid, False otherwise
    """
    return isinstance(value, str) and value in choices


def validate_max_length(value, max_length):
    """Check an optional string does not exceed max_length"""
    return value is None or (isinstance(value, str) and len(value) <= max_length)
