"""Wallet challenge-response authentication.

``WalletAuthService`` ties the pieces together:

- ``issue_challenge`` checks the address, mints a nonce and renders the text
  the wallet must sign.
- ``complete_login`` burns the nonce, checks its age, rebuilds the same text
  and verifies the signature, then derives the account identity.

The service never touches accounts or session credentials; the caller decides
what to do with the returned ``DerivedIdentity``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from wallet_signin.core.errors import FeatureDisabledError, NonceExpiredError
from wallet_signin.core.security import decode_wallet_address, verify_wallet_signature
from wallet_signin.core.settings import settings
from wallet_signin.services.challenge import format_sign_message
from wallet_signin.services.identity import DerivedIdentity, derive_identity
from wallet_signin.services.nonce_store import NonceStore, get_nonce_store

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Challenge:
    """Challenge material handed to a client before it signs."""

    nonce: str
    message: str
    expires_in_seconds: int


class WalletAuthService:
    """Service handling wallet challenge issuance and login verification."""

    def __init__(self, nonce_store: NonceStore, *, server_name: str, enabled: bool) -> None:
        self.nonce_store = nonce_store
        self.server_name = server_name
        self.enabled = enabled

    def _ensure_enabled(self) -> None:
        if not self.enabled:
            raise FeatureDisabledError()

    def issue_challenge(self, address: str) -> Challenge:
        """Mint a nonce for ``address`` and return the message to sign.

        Raises:
            FeatureDisabledError: If wallet auth is turned off.
            InvalidEncodingError, InvalidLengthError, InvalidKeyError: If the
                address is not a well-formed public key.
        """
        self._ensure_enabled()
        decode_wallet_address(address)

        nonce = self.nonce_store.generate()
        message = format_sign_message(self.server_name, nonce.value)
        logger.debug("Issued wallet challenge for %s", address)
        return Challenge(
            nonce=nonce.value,
            message=message,
            expires_in_seconds=int(self.nonce_store.ttl_seconds),
        )

    def complete_login(self, address: str, signature: str, nonce: str) -> DerivedIdentity:
        """Verify a signed challenge and return the wallet's identity.

        The nonce is consumed before anything else is checked, so it can never
        be presented again, even when it turns out to be expired or the
        signature is wrong.

        Raises:
            FeatureDisabledError: If wallet auth is turned off.
            NonceNotFoundError: If the nonce is unknown or already used.
            NonceExpiredError: If the nonce outlived the TTL.
            InvalidEncodingError, InvalidLengthError, InvalidKeyError,
            SignatureMismatchError: From signature verification.
        """
        self._ensure_enabled()

        created_at = self.nonce_store.consume(nonce)
        if self.nonce_store.is_expired(created_at):
            raise NonceExpiredError()

        message = format_sign_message(self.server_name, nonce)
        raw_key = verify_wallet_signature(address, signature, message)

        identity = derive_identity(raw_key, address)
        logger.info(
            "Wallet auth verified: %s (localpart: %s)",
            identity.display_label,
            identity.canonical_id,
        )
        return identity


def get_wallet_auth_service() -> WalletAuthService:
    """Return a wallet auth service bound to the shared nonce store."""
    return WalletAuthService(
        get_nonce_store(),
        server_name=settings.server_name,
        enabled=settings.wallet_auth_enabled,
    )
