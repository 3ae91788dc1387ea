"""Tests for the mint HTTP endpoints."""

import pytest
from fastapi import status

from cool_mint.api.v1.dependencies import get_coordinator
from cool_mint.core.settings import settings


@pytest.fixture()
def supply_of(app, make_coordinator):
    """Serve mint requests from a coordinator with a reduced ``max_supply``."""

    def _override(max_supply: int) -> None:
        app.dependency_overrides[get_coordinator] = lambda: make_coordinator(max_supply=max_supply)

    yield _override
    app.dependency_overrides.pop(get_coordinator, None)


def test_direct_mint_over_http(client, mint_request, alice) -> None:
    response = mint_request("direct", alice, payment=settings.mint_price)
    assert response.status_code == status.HTTP_201_CREATED
    data = response.json()
    assert data == {
        "recipient": alice.hex,
        "token_ids": [1],
        "quota_state": 1,
        "issued_count": 1,
    }

    owner = client.get("/api/v1/tokens/1/owner")
    assert owner.status_code == status.HTTP_200_OK
    assert owner.json() == {"token_id": 1, "owner": alice.hex}


def test_fourth_direct_mint_is_forbidden(mint_request, alice) -> None:
    for _ in range(3):
        assert mint_request("direct", alice, payment=settings.mint_price).status_code == 201

    response = mint_request("direct", alice, payment=settings.mint_price)
    assert response.status_code == status.HTTP_403_FORBIDDEN
    assert response.json()["detail"]["error"] == "SingleQuotaExceeded"


def test_underpaid_mint_is_payment_required(client, mint_request, alice) -> None:
    response = mint_request("direct", alice, payment=settings.mint_price - 1)
    assert response.status_code == status.HTTP_402_PAYMENT_REQUIRED
    assert response.json()["detail"]["error"] == "InsufficientPayment"
    assert client.get("/api/v1/mint/supply").json()["issued_count"] == 0


def test_batch_mint_over_http(client, mint_request, alice) -> None:
    response = mint_request("batch", alice, payment=settings.mint_batch_price)
    assert response.status_code == status.HTTP_201_CREATED
    assert response.json()["token_ids"] == [1, 2, 3, 4, 5, 6]
    assert response.json()["quota_state"] == 6

    again = mint_request("batch", alice, payment=settings.mint_batch_price)
    assert again.status_code == status.HTTP_403_FORBIDDEN
    assert again.json()["detail"]["error"] == "BatchQuotaExceeded"


def test_voucher_mint_over_http(client, mint_request, alice, bob, sign_voucher_for) -> None:
    signature = sign_voucher_for(bob.hex, 0)
    fields = {"recipient": bob.hex, "nonce": 0, "voucher_signature": signature}

    response = mint_request("voucher", alice, **fields)
    assert response.status_code == status.HTTP_201_CREATED
    assert response.json()["recipient"] == bob.hex
    assert response.json()["quota_state"] == 1

    assert client.get(f"/api/v1/mint/quota/{alice.hex}").json()["state"] == 1
    assert client.get(f"/api/v1/mint/quota/{bob.hex}").json()["state"] == 0
    assert client.get(f"/api/v1/mint/vouchers/{bob.hex}/0").json()["consumed"] is True

    replay = mint_request("voucher", alice, **fields)
    assert replay.status_code == status.HTTP_409_CONFLICT
    assert replay.json()["detail"]["error"] == "ReplayedVoucher"


def test_redirected_voucher_is_unauthorized(mint_request, alice, bob, sign_voucher_for) -> None:
    signature = sign_voucher_for(bob.hex, 0)
    response = mint_request(
        "voucher", alice, recipient=alice.hex, nonce=0, voucher_signature=signature
    )
    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert response.json()["detail"]["error"] == "InvalidVoucherSigner"


def test_bad_caller_signature_is_rejected(client, alice, bob) -> None:
    response = client.post(
        "/api/v1/mint/direct",
        json={"caller": alice.hex, "client_nonce": "n1", "payment": settings.mint_price},
        headers={"X-Caller-Signature": bob.sign(b"direct|whatever")},
    )
    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert client.get(f"/api/v1/mint/quota/{alice.hex}").json()["state"] == 0


def test_missing_caller_signature_is_unprocessable(client, alice) -> None:
    response = client.post(
        "/api/v1/mint/direct",
        json={"caller": alice.hex, "client_nonce": "n1", "payment": settings.mint_price},
    )
    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


def test_replayed_request_is_rejected(client, mint_request, alice) -> None:
    first = mint_request("direct", alice, client_nonce="same", payment=settings.mint_price)
    assert first.status_code == status.HTTP_201_CREATED

    second = mint_request("direct", alice, client_nonce="same", payment=settings.mint_price)
    assert second.status_code == status.HTTP_429_TOO_MANY_REQUESTS
    assert client.get("/api/v1/mint/supply").json()["issued_count"] == 1


def test_invalid_identity_is_unprocessable(client, alice) -> None:
    response = client.post(
        "/api/v1/mint/direct",
        json={"caller": "not-hex", "client_nonce": "n1", "payment": settings.mint_price},
        headers={"X-Caller-Signature": "00" * 64},
    )
    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

    assert client.get("/api/v1/mint/quota/xyz").status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


def test_negative_payment_is_unprocessable(mint_request, alice) -> None:
    response = mint_request("direct", alice, payment=-1)
    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


def test_supply_snapshot(client) -> None:
    response = client.get("/api/v1/mint/supply")
    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {
        "issued_count": 0,
        "max_supply": settings.max_supply,
        "batch_size": settings.batch_size,
        "mint_price": settings.mint_price,
        "mint_batch_price": settings.mint_batch_price,
    }


def test_quota_view_for_fresh_requester(client, alice) -> None:
    response = client.get(f"/api/v1/mint/quota/{alice.hex}")
    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {
        "requester": alice.hex,
        "state": 0,
        "single_count": 0,
        "batch_used": False,
        "single_mints_remaining": 3,
        "can_single_mint": True,
        "can_batch_mint": True,
    }


def test_owner_of_unminted_token_is_not_found(client) -> None:
    response = client.get("/api/v1/tokens/1/owner")
    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json()["detail"]["error"] == "NonexistentToken"


def test_quota_view_after_a_direct_mint(client, mint_request, alice) -> None:
    assert mint_request("direct", alice, payment=settings.mint_price).status_code == 201

    data = client.get(f"/api/v1/mint/quota/{alice.hex}").json()
    assert data["state"] == 1
    assert data["single_mints_remaining"] == 2


def test_direct_mint_past_supply_is_conflict(client, mint_request, supply_of, alice, bob) -> None:
    supply_of(1)
    assert mint_request("direct", alice, payment=settings.mint_price).status_code == 201

    response = mint_request("direct", bob, payment=settings.mint_price)
    assert response.status_code == status.HTTP_409_CONFLICT
    assert response.json()["detail"]["error"] == "SupplyExhausted"
    assert client.get(f"/api/v1/mint/quota/{bob.hex}").json()["state"] == 0

    supply = client.get("/api/v1/mint/supply").json()
    assert supply["issued_count"] == 1
    assert supply["max_supply"] == 1


def test_batch_past_supply_is_conflict(client, mint_request, supply_of, alice) -> None:
    supply_of(5)
    response = mint_request("batch", alice, payment=settings.mint_batch_price)
    assert response.status_code == status.HTTP_409_CONFLICT
    assert response.json()["detail"]["error"] == "BatchExceedsSupply"

    assert client.get("/api/v1/tokens/1/owner").status_code == status.HTTP_404_NOT_FOUND
    assert client.get(f"/api/v1/mint/quota/{alice.hex}").json()["state"] == 0
