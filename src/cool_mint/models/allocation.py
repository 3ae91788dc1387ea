# src/cool_mint/models/allocation.py
"""Token allocation bookkeeping models."""

from sqlalchemy import BigInteger, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from cool_mint.db.session import Base


class AllocationCounter(Base):
    """Singleton row holding the global issued-token counter."""

    __tablename__ = "allocation_counter"

    id: Mapped[int] = mapped_column(BigInteger, primary_key=True, default=1)
    issued_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)


class TokenOwner(Base):
    """Ownership ledger entry; the primary key enforces one owner per id."""

    __tablename__ = "token_owner"

    token_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    owner_hex: Mapped[str] = mapped_column(Text, nullable=False, index=True)
