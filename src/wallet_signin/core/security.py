"""Signature utilities built on Ed25519 primitives.

Wallet addresses and signatures travel as base58 text, the same encoding
Solana wallets display. Decoding and verification run in a fixed order so the
first problem found determines the error the caller sees.
"""
from __future__ import annotations

import base58
from nacl.bindings import crypto_core_ed25519_is_valid_point
from nacl.exceptions import BadSignatureError
from nacl.signing import VerifyKey

from wallet_signin.core.errors import (
    InvalidEncodingError,
    InvalidKeyError,
    InvalidLengthError,
    SignatureMismatchError,
)

PUBKEY_LENGTH_BYTES = 32
SIGNATURE_LENGTH_BYTES = 64


def _decode_base58(field: str, data: str) -> bytes:
    # b58decode strips surrounding whitespace; it is not part of the alphabet.
    if data != data.strip():
        raise InvalidEncodingError(f"Invalid base58 {field}.")
    try:
        return base58.b58decode(data)
    except ValueError as err:
        raise InvalidEncodingError(f"Invalid base58 {field}.") from err


def decode_wallet_address(address: str) -> bytes:
    """Decode and validate a base58 wallet address.

    Args:
        address: Base58-encoded Ed25519 public key.

    Returns:
        The raw 32-byte public key.

    Raises:
        InvalidEncodingError: If the address is not valid base58.
        InvalidLengthError: If it does not decode to exactly 32 bytes.
        InvalidKeyError: If the bytes are not a usable curve point.
    """
    pubkey_bytes = _decode_base58("address", address)
    if len(pubkey_bytes) != PUBKEY_LENGTH_BYTES:
        raise InvalidLengthError("Wallet address must decode to exactly 32 bytes.")
    if not crypto_core_ed25519_is_valid_point(pubkey_bytes):
        raise InvalidKeyError()
    return pubkey_bytes


def verify_wallet_signature(address: str, signature: str, message: str) -> bytes:
    """Verify a base58 Ed25519 signature over a text message.

    Args:
        address: Base58-encoded public key claiming to have signed.
        signature: Base58-encoded 64-byte detached signature.
        message: Exact text that was signed; verified over its UTF-8 bytes.

    Returns:
        The raw 32-byte public key on success.

    Raises:
        InvalidEncodingError: If the address or signature is not valid base58.
        InvalidLengthError: If the key is not 32 bytes or the signature not 64.
        InvalidKeyError: If the key bytes are not a usable curve point.
        SignatureMismatchError: If the signature does not verify.
    """
    pubkey_bytes = decode_wallet_address(address)
    verify_key = VerifyKey(pubkey_bytes)

    signature_bytes = _decode_base58("signature", signature)
    if len(signature_bytes) != SIGNATURE_LENGTH_BYTES:
        raise InvalidLengthError("Signature must be exactly 64 bytes.")

    try:
        verify_key.verify(message.encode("utf-8"), signature_bytes)
    except (BadSignatureError, ValueError) as err:
        raise SignatureMismatchError() from err
    return pubkey_bytes
