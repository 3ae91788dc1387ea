"""initial mint tables

Revision ID: 5c1e0a9d7b42
Revises:
Create Date: 2026-10-19 09:12:40.511203

"""
from __future__ import annotations

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "5c1e0a9d7b42"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create quota, voucher, allocation, ownership and event tables."""
    op.create_table(
        "requester_quota",
        sa.Column("requester_hex", sa.Text(), nullable=False),
        sa.Column("state", sa.SmallInteger(), nullable=False),
        sa.PrimaryKeyConstraint("requester_hex"),
    )
    op.create_table(
        "voucher_redemption",
        sa.Column("recipient_hex", sa.Text(), nullable=False),
        sa.Column("nonce", sa.Text(), nullable=False),
        sa.PrimaryKeyConstraint("recipient_hex", "nonce"),
    )
    op.create_table(
        "request_nonce",
        sa.Column("caller_hex", sa.Text(), nullable=False),
        sa.Column("nonce_hash_hex", sa.Text(), nullable=False),
        sa.PrimaryKeyConstraint("caller_hex", "nonce_hash_hex"),
    )
    op.create_table(
        "allocation_counter",
        sa.Column("id", sa.BigInteger(), nullable=False),
        sa.Column("issued_count", sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_table(
        "token_owner",
        sa.Column("token_id", sa.Integer(), autoincrement=False, nullable=False),
        sa.Column("owner_hex", sa.Text(), nullable=False),
        sa.PrimaryKeyConstraint("token_id"),
    )
    op.create_index("ix_token_owner_owner_hex", "token_owner", ["owner_hex"])
    op.create_table(
        "mint_event",
        sa.Column(
            "id",
            sa.BigInteger().with_variant(sa.Integer(), "sqlite"),
            autoincrement=True,
            nullable=False,
        ),
        sa.Column("event_type", sa.VARCHAR(length=20), nullable=False),
        sa.Column("recipient_hex", sa.Text(), nullable=False),
        sa.Column("nonce", sa.Text(), nullable=True),
        sa.Column("token_ids", sa.Text(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_mint_event_recipient_hex", "mint_event", ["recipient_hex"])


def downgrade() -> None:
    """Drop all mint tables."""
    op.drop_index("ix_mint_event_recipient_hex", table_name="mint_event")
    op.drop_table("mint_event")
    op.drop_index("ix_token_owner_owner_hex", table_name="token_owner")
    op.drop_table("token_owner")
    op.drop_table("allocation_counter")
    op.drop_table("request_nonce")
    op.drop_table("voucher_redemption")
    op.drop_table("requester_quota")
