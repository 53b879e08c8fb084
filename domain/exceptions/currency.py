class CurrencyException(Exception):
    pass


class InvalidRateError(CurrencyException):
    pass

class ProviderError(CurrencyException):
    pass

class CacheError(CurrencyException):
    pass

class SelectionError(CurrencyException):
    pass
