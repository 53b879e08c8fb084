from .base import ExchangeRateProvider
from .currencyapi import CurrencyAPIProvider
from .fixerio import FixerIOProvider
from .openexchange import OpenExchangeProvider

__all__ = ['ExchangeRateProvider', 'CurrencyAPIProvider', 'FixerIOProvider', 'OpenExchangeProvider']
