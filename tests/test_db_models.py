"""Mapping checks for the mint tables.

Covers primary keys, the SQLite rendering of the audit log id, and the
per-test cleanup the ``db_session`` fixture performs after commits.
"""

from sqlalchemy import select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.schema import CreateTable

from cool_mint.models import MintEvent, RequesterQuotaRow, TokenOwner, VoucherRedemption


def test_table_names():
    assert MintEvent.__tablename__ == "mint_event"
    assert RequesterQuotaRow.__tablename__ == "requester_quota"
    assert TokenOwner.__tablename__ == "token_owner"


def test_voucher_redemption_composite_primary_key():
    pk_names = {c.name for c in VoucherRedemption.__table__.primary_key}
    assert pk_names == {"recipient_hex", "nonce"}


def test_mint_event_id_is_a_sqlite_rowid():
    """SQLite only fills ids for INTEGER primary keys; BIGINT stays on Postgres."""
    table = MintEvent.__table__
    assert "id INTEGER NOT NULL" in str(CreateTable(table).compile(dialect=sqlite.dialect()))
    assert "id BIGSERIAL NOT NULL" in str(CreateTable(table).compile(dialect=postgresql.dialect()))


def test_mint_events_get_increasing_ids(db_session, coordinator, test_settings, alice, bob):
    coordinator.mint_direct(alice.hex, test_settings.mint_price)
    coordinator.mint_batch(bob.hex, test_settings.mint_batch_price)
    coordinator.mint_direct(bob.hex, test_settings.mint_price)

    events = db_session.scalars(select(MintEvent).order_by(MintEvent.id)).all()
    assert [e.event_type for e in events] == ["single", "batch", "single"]
    assert [e.token_id_list for e in events] == [[1], [2, 3, 4, 5, 6, 7], [8]]
    ids = [e.id for e in events]
    assert all(isinstance(i, int) for i in ids)
    assert ids == sorted(set(ids))


def test_committed_rows_are_visible_within_a_test(db_session):
    db_session.add(RequesterQuotaRow(requester_hex="ab" * 32, state=1))
    db_session.commit()
    assert db_session.get(RequesterQuotaRow, "ab" * 32).state == 1


def test_committed_rows_do_not_leak_into_the_next_test(db_session):
    # Runs after the test above; the fixture deletes every table on teardown.
    assert db_session.scalars(select(RequesterQuotaRow)).all() == []
    assert db_session.scalars(select(MintEvent)).all() == []
