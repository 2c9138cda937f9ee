"""Service layer for wallet challenge-response authentication."""

from .challenge import format_sign_message
from .identity import DerivedIdentity, canonical_id, display_label
from .nonce_store import Nonce, NonceStore, get_nonce_store
from .wallet_auth import Challenge, WalletAuthService, get_wallet_auth_service

__all__ = [
    "Challenge",
    "DerivedIdentity",
    "Nonce",
    "NonceStore",
    "WalletAuthService",
    "canonical_id",
    "display_label",
    "format_sign_message",
    "get_nonce_store",
    "get_wallet_auth_service",
]
