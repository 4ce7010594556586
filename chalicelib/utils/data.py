import json
from decimal import Decimal, InvalidOperation
from typing import Any

from chalicelib.utils import exceptions
from chalicelib.utils.logger import logger


def replace_dict_key(item, orig_key, new_key):
    if orig_key in item:
        if new_key not in item:
            item[new_key] = item[orig_key]
        del item[orig_key]


def substitute_keys_to_db(item):
    replace_dict_key(item, 'id', 'id_')
    replace_dict_key(item, 'name', 'name_')


def substitute_keys_from_db(item):
    item.pop('partkey', None)
    item.pop('sortkey', None)
    replace_dict_key(item, 'id_', 'id')
    replace_dict_key(item, 'name_', 'name')


def parse_raw_body(chalice_request) -> dict:
    request_raw_body = chalice_request.raw_body
    if not request_raw_body:
        return {}
    try:
        item = json.loads(request_raw_body, parse_float=Decimal)
    except ValueError:
        raise exceptions.ValidationException('request body is not valid JSON')
    if not isinstance(item, dict):
        raise exceptions.ValidationException('request body must be a JSON object')
    return item


def _parse_decimal(value: Any):
    """
    Returns a finite Decimal for numbers and numeric strings, None otherwise.
    An empty (or blank) string parses as zero.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float, Decimal)):
        number = Decimal(str(value))
    elif isinstance(value, str):
        if not value.strip():
            return Decimal(0)
        try:
            number = Decimal(value.strip())
        except InvalidOperation:
            return None
    else:
        return None
    return number if number.is_finite() else None


def to_number(value: Any) -> Decimal:
    """
    Numeric coercion used for stored prices.
    Numbers and numeric strings keep their value, blank strings count as zero,
    everything else (None, bool, NaN, Infinity, garbage) counts as zero.
    """
    number = _parse_decimal(value)
    if number is None:
        logger.warning(f'to_number ::: {value=} is not numeric, counted as 0')
        return Decimal(0)
    return number


def to_cents(price: Any) -> int:
    """
    Converts a price in currency units to an integer amount of cents.
    The fraction of a cent is truncated, no rounding is applied.
    """
    number = _parse_decimal(price)
    if number is None or number <= 0:
        raise exceptions.ValidationException(f'price={price!r} must be a positive number')
    return int(number * 100)


def to_response_number(number: Decimal):
    """Integral values are returned as int, so 35 is not serialized as 35.0"""
    return int(number) if number == number.to_integral_value() else number
