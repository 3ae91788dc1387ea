"""SQLAlchemy model for the mint audit log."""

from sqlalchemy import VARCHAR, BigInteger, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from cool_mint.db.session import Base


class MintEvent(Base):
    """Record of a successful mint, written in the same transaction as the mint."""

    __tablename__ = "mint_event"

    # SQLite only assigns rowids to INTEGER primary keys.
    id: Mapped[int] = mapped_column(
        BigInteger().with_variant(Integer, "sqlite"), primary_key=True, autoincrement=True
    )
    event_type: Mapped[str] = mapped_column(
        VARCHAR(20), nullable=False
    )  # 'single', 'voucher', 'batch'
    recipient_hex: Mapped[str] = mapped_column(Text, nullable=False, index=True)
    nonce: Mapped[str | None] = mapped_column(Text, nullable=True)  # decimal string
    token_ids: Mapped[str] = mapped_column(Text, nullable=False)  # comma separated

    @property
    def token_id_list(self) -> list[int]:
        """Return the minted token ids as integers."""
        return [int(part) for part in self.token_ids.split(",") if part]
