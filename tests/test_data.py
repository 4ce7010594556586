from decimal import Decimal
from types import SimpleNamespace

import pytest

from chalicelib.utils import data
from chalicelib.utils.exceptions import ValidationException


@pytest.mark.parametrize('value, expected', [
    (10, Decimal('10')),
    (2.5, Decimal('2.5')),
    (Decimal('3.10'), Decimal('3.10')),
    ('20', Decimal('20')),
    (' 4.25 ', Decimal('4.25')),
    ('', Decimal('0')),
    ('abc', Decimal('0')),
    ('NaN', Decimal('0')),
    ('Infinity', Decimal('0')),
    (None, Decimal('0')),
    (True, Decimal('0')),
    ([1], Decimal('0')),
])
def test_to_number(value, expected):
    assert data.to_number(value) == expected


@pytest.mark.parametrize('price, cents', [
    (Decimal('19.999'), 1999),
    (19.99, 1999),
    ('0.5', 50),
    (3, 300),
])
def test_to_cents(price, cents):
    assert data.to_cents(price) == cents


@pytest.mark.parametrize('price', [None, '', 'abc', 0, -1, True, 'Infinity'])
def test_to_cents_rejects_invalid_price(price):
    with pytest.raises(ValidationException):
        data.to_cents(price)


def test_parse_raw_body():
    request = SimpleNamespace(raw_body=b'{"name": "Burger", "price": 18.5, "image": null}')

    assert data.parse_raw_body(request) == {'name': 'Burger', 'price': Decimal('18.5'), 'image': None}


def test_parse_raw_body_keeps_empty_values():
    request = SimpleNamespace(raw_body=b'{"recipe": "", "details": {"note": null}, "_values_from_ui_strategy": "delete_empty"}')

    assert data.parse_raw_body(request) == {
        'recipe': '', 'details': {'note': None}, '_values_from_ui_strategy': 'delete_empty'
    }


def test_parse_empty_body():
    assert data.parse_raw_body(SimpleNamespace(raw_body=b'')) == {}


@pytest.mark.parametrize('raw_body', [b'[1, 2]', b'"text"', b'{not json'])
def test_parse_raw_body_rejects_non_objects(raw_body):
    with pytest.raises(ValidationException):
        data.parse_raw_body(SimpleNamespace(raw_body=raw_body))


def test_substitute_keys():
    item = {'id': '1', 'name': 'Burger', 'price': 1}
    data.substitute_keys_to_db(item)
    assert item == {'id_': '1', 'name_': 'Burger', 'price': 1}

    item.update({'partkey': 'menu', 'sortkey': '1'})
    data.substitute_keys_from_db(item)
    assert item == {'id': '1', 'name': 'Burger', 'price': 1}


@pytest.mark.parametrize('number, expected', [
    (Decimal('35'), 35),
    (Decimal('35.0'), 35),
    (Decimal('7.5'), Decimal('7.5')),
])
def test_to_response_number(number, expected):
    result = data.to_response_number(number)

    assert result == expected
    assert type(result) is type(expected)
