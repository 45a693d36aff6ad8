"""Utilities package"""
from .validators import missing_fields, parse_datetime, validate_choice, validate_max_length
from .helpers import quantize_money, quantize_hours, to_minor_units, format_currency, safe_decimal

__all__ = [
    'missing_fields',
    'parse_datetime',
    'validate_choice',
    'validate_max_length',
    'quantize_money',
    'quantize_hours',
    'to_minor_units',
    'format_currency',
    'safe_decimal',
]
