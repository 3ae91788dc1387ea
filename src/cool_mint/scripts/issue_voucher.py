"""Sign a mint voucher with the voucher signer's private key.

Usage:
  python -m cool_mint.scripts.issue_voucher --key <signer-seed-hex> --to <recipient-hex> --nonce 0

Prints the signature together with the signing domain so the voucher can be
handed to whoever will submit it. The domain defaults to the runtime
settings (COLLECTION_NAME, COLLECTION_VERSION, CHAIN_ID, DEPLOYMENT_ADDRESS).
"""

from __future__ import annotations

import argparse
import json
import sys

from nacl.encoding import HexEncoder
from nacl.signing import SigningKey

from cool_mint.core.security import normalize_identity
from cool_mint.core.settings import settings
from cool_mint.services.voucher import VoucherDomain, sign_voucher


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Sign a Cool Mint voucher")
    parser.add_argument("--key", required=True, help="Hex-encoded 32-byte Ed25519 seed")
    parser.add_argument("--to", required=True, help="Recipient identity (hex public key)")
    parser.add_argument("--nonce", required=True, type=int, help="Voucher nonce")
    parser.add_argument("--chain-id", type=int, default=None, help="Override CHAIN_ID")
    parser.add_argument(
        "--deployment", default=None, help="Override DEPLOYMENT_ADDRESS (hex identity)"
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        signing_key = SigningKey(args.key.removeprefix("0x"), encoder=HexEncoder)
        recipient = normalize_identity(args.to)
        domain = VoucherDomain(
            name=settings.collection_name,
            version=settings.collection_version,
            chain_id=settings.chain_id if args.chain_id is None else args.chain_id,
            verifying_identity=normalize_identity(args.deployment or settings.deployment_address),
        )
        signature = sign_voucher(signing_key, domain, recipient, args.nonce)
    except ValueError as exc:
        print(f"[issue_voucher] ERROR: {exc}", file=sys.stderr)
        return 1

    print(
        json.dumps(
            {
                "signer": signing_key.verify_key.encode(encoder=HexEncoder).decode(),
                "recipient": recipient,
                "nonce": args.nonce,
                "signature": signature,
                "domain": {
                    "name": domain.name,
                    "version": domain.version,
                    "chain_id": domain.chain_id,
                    "verifying_identity": domain.verifying_identity,
                },
            },
            indent=2,
        )
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
