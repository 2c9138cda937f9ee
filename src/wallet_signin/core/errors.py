"""Error taxonomy for wallet signature authentication.

Every failure of the challenge-response flow is reported as a subclass of
``WalletAuthError``. Each class carries a stable ``reason`` code that callers
can surface to clients. None of these errors is retried internally: the nonce
errors mean the client has to request a fresh challenge, the rest mean the
request itself was malformed or the capability is switched off.
"""

from __future__ import annotations


class WalletAuthError(Exception):
    """Base exception raised for wallet authentication failures."""

    reason = "wallet_auth_error"
    default_message = "Wallet authentication failed."

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)


class InvalidEncodingError(WalletAuthError):
    """Raised when an address or signature is not valid base58."""

    reason = "invalid_encoding"
    default_message = "Invalid base58 encoding."


class InvalidLengthError(WalletAuthError):
    """Raised when decoded key or signature bytes have the wrong size."""

    reason = "invalid_length"
    default_message = "Decoded value has the wrong length."


class InvalidKeyError(WalletAuthError):
    """Raised when 32 bytes do not form a valid ed25519 public key."""

    reason = "invalid_key"
    default_message = "Invalid ed25519 public key."


class NonceNotFoundError(WalletAuthError):
    """Raised when a nonce was never issued, already used, or pruned."""

    reason = "nonce_not_found"
    default_message = "Nonce not found or already used."


class NonceExpiredError(WalletAuthError):
    """Raised when a consumed nonce turns out to be older than the TTL."""

    reason = "nonce_expired"
    default_message = "Nonce has expired."


class SignatureMismatchError(WalletAuthError):
    """Raised when the signature does not verify over the challenge message."""

    reason = "signature_mismatch"
    default_message = "Signature verification failed."


class FeatureDisabledError(WalletAuthError):
    """Raised when wallet authentication is turned off on this server."""

    reason = "feature_disabled"
    default_message = "Wallet authentication is not enabled on this server."
