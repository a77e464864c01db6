"""
Common helpers - أدوات مشتركة للعروض
CourseStream - Video Course Platform
"""

from decimal import Decimal, InvalidOperation


def int_param(value, default, minimum=None, maximum=None):
    """?page=abc -> default"""
    try:
        number = int(value)
    except (TypeError, ValueError):
        return default
    if minimum is not None:
        number = max(minimum, number)
    if maximum is not None:
        number = min(maximum, number)
    return number


def decimal_param(value, default=Decimal('0'), maximum=Decimal('99999999.99')):
    """'19.5' -> Decimal('19.50'); غير رقمي أو سالب أو أكبر من maximum -> default"""
    try:
        number = Decimal(str(value))
    except (InvalidOperation, TypeError, ValueError):
        return default
    if not number.is_finite() or number < 0 or number > maximum:
        return default
    return number.quantize(Decimal('0.01'))


def tags_param(value):
    """['a', ' b '] أو 'a, b' -> 'a,b'"""
    if not value:
        return ''
    if not isinstance(value, (list, tuple)):
        value = str(value).split(',')
    return ','.join(str(t).strip() for t in value if str(t).strip())
