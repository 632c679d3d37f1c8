from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from sqlalchemy import DateTime, Integer, Numeric, Text, UniqueConstraint
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    pass


# ---------------------------
# Core: mono
# ---------------------------


class MonoRecord(Base):
    """One imported statement row.

    Monetary columns hold human-readable decimals; the importer keeps
    fixed-point integers in memory and divides them down at insert time.
    """

    __tablename__ = "mono"

    # Surrogate rowid; the natural key is (created_at, title, amount).
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, index=True)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    mcc: Mapped[int] = mapped_column(Integer, nullable=False)
    amount: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    amount_orig: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    currency: Mapped[str] = mapped_column(Text, nullable=False)
    exchange: Mapped[Decimal] = mapped_column(Numeric(10, 5), nullable=False)
    commission: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    cashback: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    rest: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)

    __table_args__ = (
        UniqueConstraint("created_at", "title", "amount", name="uq_mono_natural_key"),
    )


NATURAL_KEY_COLUMNS: tuple[str, ...] = ("created_at", "title", "amount")


__all__ = [
    "Base",
    "MonoRecord",
    "NATURAL_KEY_COLUMNS",
]
