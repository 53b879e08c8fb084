# nosec B101

from decimal import Decimal

import pytest

from domain.exceptions.currency import InvalidRateError
from domain.services.rate_math import calculate_exchange_rate, convert


@pytest.mark.parametrize('rate', [Decimal('1'), Decimal('0.85'), Decimal('1530.5'), Decimal('-2')])
def test_same_rate_gives_unit_exchange_rate(rate):
    assert calculate_exchange_rate(rate, rate) == 1


def test_exchange_rate_is_target_over_source():
    assert calculate_exchange_rate(Decimal('0.8'), Decimal('1600')) == Decimal('2000')


def test_zero_source_rate_raises():
    with pytest.raises(InvalidRateError):
        calculate_exchange_rate(Decimal('0'), Decimal('1.2'))


def test_zero_target_rate_is_allowed():
    assert calculate_exchange_rate(Decimal('1.2'), Decimal('0')) == 0


def test_convert_multiplies_amount_by_rate():
    assert convert(Decimal('100'), Decimal('0.85')) == Decimal('85.00')


def test_convert_is_linear():
    amount, rate = Decimal('12.34'), Decimal('1.0731')
    assert convert(2 * amount, rate) == 2 * convert(amount, rate)


@pytest.mark.parametrize('amount', [Decimal('0'), Decimal('-50')])
def test_convert_passes_zero_and_negative_amounts_through(amount):
    assert convert(amount, Decimal('2')) == amount * 2
