# tests/conftest.py
from __future__ import annotations

import os
from collections.abc import Callable, Generator, Iterator
from itertools import count
from typing import Any

import pytest
from nacl.encoding import HexEncoder
from nacl.signing import SigningKey

# Deterministic voucher signer, configured before the settings module loads.
VOUCHER_SIGNER_SEED = bytes(range(32))
_VOUCHER_SIGNER = SigningKey(VOUCHER_SIGNER_SEED)
os.environ["MINT_VOUCHER_SIGNER"] = _VOUCHER_SIGNER.verify_key.encode(encoder=HexEncoder).decode()
os.environ.setdefault("DATABASE_URL", "sqlite://")

from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from cool_mint.core.settings import Settings, settings
from cool_mint.db.session import Base
from cool_mint.db.session import get_db as app_get_session
from cool_mint.main import app as fastapi_app
from cool_mint.services.minting import MintCoordinator
from cool_mint.services.signing import canonical_request_bytes
from cool_mint.services.voucher import VoucherAuthorizer, VoucherDomain, sign_voucher

TEST_DB_URL = "sqlite://"

_CLIENT_NONCE_COUNTER = count(1)


@pytest.fixture(scope="session")
def engine() -> Generator[Engine, None, None]:
    engine = create_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def db_session(engine: Engine) -> Iterator[Session]:
    SessionLocal = sessionmaker(
        bind=engine,
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
    )
    session = SessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()

        # Ensure each test sees a clean database even if commits occurred.
        with engine.begin() as cleanup_conn:
            for table in reversed(Base.metadata.sorted_tables):
                cleanup_conn.execute(table.delete())


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture(autouse=True)
def override_session_dependency(app: FastAPI, db_session: Session) -> Iterator[None]:
    def _get_session_override() -> Generator[Session, None, None]:
        yield db_session

    app.dependency_overrides[app_get_session] = _get_session_override
    try:
        yield
    finally:
        app.dependency_overrides.pop(app_get_session, None)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    """Provide the Settings instance the service runs with."""
    return settings


@pytest.fixture(scope="session")
def voucher_signer() -> SigningKey:
    """Private key of the configured voucher signer."""
    return _VOUCHER_SIGNER


@pytest.fixture(scope="session")
def voucher_domain(test_settings: Settings) -> VoucherDomain:
    return VoucherDomain.from_settings(test_settings)


@pytest.fixture()
def authorizer(voucher_domain: VoucherDomain, voucher_signer: SigningKey) -> VoucherAuthorizer:
    signer_hex = voucher_signer.verify_key.encode(encoder=HexEncoder).decode()
    return VoucherAuthorizer(signer_hex, voucher_domain)


@pytest.fixture()
def coordinator(db_session: Session, authorizer: VoucherAuthorizer) -> MintCoordinator:
    return MintCoordinator(db_session, authorizer)


@pytest.fixture()
def make_coordinator(
    db_session: Session, authorizer: VoucherAuthorizer, test_settings: Settings
) -> Callable[..., MintCoordinator]:
    """Build a coordinator with overridden settings, e.g. a tiny supply."""

    def _make(**overrides: Any) -> MintCoordinator:
        return MintCoordinator(db_session, authorizer, test_settings.model_copy(update=overrides))

    return _make


class Identity:
    """A requester identity with its signing key."""

    def __init__(self) -> None:
        self.key = SigningKey.generate()
        self.hex = self.key.verify_key.encode(encoder=HexEncoder).decode()

    def sign(self, payload: bytes) -> str:
        return self.key.sign(payload).signature.hex()


@pytest.fixture()
def make_identity() -> Callable[[], Identity]:
    return Identity


@pytest.fixture()
def alice() -> Identity:
    return Identity()


@pytest.fixture()
def bob() -> Identity:
    return Identity()


@pytest.fixture()
def sign_voucher_for(
    voucher_signer: SigningKey, voucher_domain: VoucherDomain
) -> Callable[..., str]:
    """Return a helper that signs vouchers with the configured signer."""

    def _sign(recipient_hex: str, nonce: int = 0, key: SigningKey | None = None) -> str:
        return sign_voucher(key or voucher_signer, voucher_domain, recipient_hex, nonce)

    return _sign


@pytest.fixture()
def mint_request(client: TestClient) -> Callable[..., Any]:
    """Return a helper that POSTs a mint request signed by the caller."""

    def _post(
        channel: str, caller: Identity, *, client_nonce: str | None = None, **fields: Any
    ) -> Any:
        nonce = client_nonce or f"cn-{next(_CLIENT_NONCE_COUNTER)}"
        if channel == "voucher":
            extra = (fields["recipient"], fields["nonce"], fields["voucher_signature"])
        else:
            extra = (fields["payment"],)
        payload = canonical_request_bytes(channel, caller.hex, nonce, *extra)
        return client.post(
            f"/api/v1/mint/{channel}",
            json={"caller": caller.hex, "client_nonce": nonce, **fields},
            headers={"X-Caller-Signature": caller.sign(payload)},
        )

    return _post
