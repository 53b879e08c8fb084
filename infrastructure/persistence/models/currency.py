from decimal import Decimal

from sqlalchemy import DECIMAL, Integer, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
	pass


class CurrencyRateDB(Base):
	"""One row per currency of the most recent fetch generation."""

	__tablename__ = 'currency_rates'

	position: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
	code: Mapped[str] = mapped_column(String(10), nullable=False, unique=True)
	name: Mapped[str] = mapped_column(String(100), nullable=False)
	rate: Mapped[Decimal] = mapped_column(DECIMAL(precision=24, scale=10), nullable=False)
