from .rate_math import calculate_exchange_rate, convert
from .date_display import display_date

__all__ = ['calculate_exchange_rate', 'convert', 'display_date']
