from decimal import Decimal

from domain.exceptions.currency import InvalidRateError


def calculate_exchange_rate(source_rate: Decimal, target_rate: Decimal) -> Decimal:
    """Rate that turns one unit of the source currency into the target currency.

    Both rates are expressed against the same base currency.
    """
    if source_rate == 0:
        raise InvalidRateError("Source currency rate must be non-zero")
    return Decimal(target_rate) / Decimal(source_rate)


def convert(amount: Decimal, exchange_rate: Decimal) -> Decimal:
    return Decimal(amount) * Decimal(exchange_rate)
