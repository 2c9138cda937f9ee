"""Account identifiers derived from wallet public keys."""

from __future__ import annotations

from dataclasses import dataclass

import base58

from wallet_signin.core.security import PUBKEY_LENGTH_BYTES

CANONICAL_ID_LENGTH = PUBKEY_LENGTH_BYTES * 2


@dataclass(frozen=True)
class DerivedIdentity:
    """Identity established by a verified wallet signature."""

    canonical_id: str
    display_label: str


def canonical_id(raw_key: bytes) -> str:
    """Return the lowercase hex rendering of a raw public key.

    Hex of a fixed 32-byte key is always 64 characters drawn from ``0-9a-f``,
    which is a valid account localpart and maps back to exactly one key.
    """
    return raw_key.hex()


def display_label(address: str) -> str:
    """Return the wallet address as the user supplied it."""
    return address


def derive_identity(raw_key: bytes, address: str) -> DerivedIdentity:
    """Bundle the canonical id and display label for a verified key."""
    return DerivedIdentity(canonical_id=canonical_id(raw_key), display_label=display_label(address))


def address_from_canonical_id(identifier: str) -> str:
    """Convert a canonical id back into the base58 wallet address."""
    raw_key = bytes.fromhex(identifier)
    if len(raw_key) != PUBKEY_LENGTH_BYTES:
        raise ValueError("Canonical ids must encode exactly 32 bytes")
    return base58.b58encode(raw_key).decode()


def qualified_user_id(identifier: str, server_name: str) -> str:
    """Build the fully qualified ``@localpart:server`` user id."""
    return f"@{identifier}:{server_name}"
