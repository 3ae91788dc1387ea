# src/cool_mint/models/quota.py
"""Per-requester mint quota storage."""

from sqlalchemy import SmallInteger, Text
from sqlalchemy.orm import Mapped, mapped_column

from cool_mint.db.session import Base


class RequesterQuotaRow(Base):
    """Packed quota state for one requester identity.

    Rows are created lazily on the first successful mint; a missing row
    reads as state 0.
    """

    __tablename__ = "requester_quota"

    requester_hex: Mapped[str] = mapped_column(Text, primary_key=True)
    state: Mapped[int] = mapped_column(SmallInteger, nullable=False, default=0)
