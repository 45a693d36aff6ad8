"""
Helper utilities
"""
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

CENT = Decimal('0.01')
TENTH = Decimal('0.1')


def quantize_money(amount):
    """
    Round an amount to whole cents

    Args:
        amount (Decimal): Amount in major units

    Returns:
        Decimal: Amount with two decimal places
    """
    return Decimal(amount).quantize(CENT, rounding=ROUND_HALF_UP)


def quantize_hours(hours):
    """Round a duration to tenths of an hour, halves rounded up like money"""
    return Decimal(hours).quantize(TENTH, rounding=ROUND_HALF_UP)


def to_minor_units(amount):
    """
    Convert a major-unit amount to the processor's integer minor units

    Args:
        amount: Decimal, int, float or numeric string

    Returns:
        int: round(amount * 100), halves rounded away from zero
    """
    return int((Decimal(str(amount)) * 100).quantize(Decimal('1'), rounding=ROUND_HALF_UP))


def format_currency(amount, currency='USD'):
    """
    Format amount as currency

    Args:
        amount: Numeric amount
        currency (str): Currency code

    Returns:
        str: Formatted currency string
    """
    if isinstance(amount, (Decimal, float, int)):
        amount = quantize_money(Decimal(str(amount)))

        if currency.upper() == 'USD':
            return f'${amount:,.2f}'
        return f'{amount:,.2f} {currency.upper()}'

    return str(amount)


def safe_decimal(value, default=None):
    """
    Safely convert value to Decimal

    Args:
        value: Value to convert (str, int, float or Decimal)
        default: Value returned if conversion fails

    Returns:
        Decimal: Converted value or default
    """
    if isinstance(value, bool) or value is None:
        return default
    try:
        result = Decimal(str(value).strip())
    except (InvalidOperation, ValueError, TypeError):
        return default
    if not result.is_finite():
        return default
    return result
