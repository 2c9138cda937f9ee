"""Challenge message shared by issuance and verification."""

from __future__ import annotations

from typing import Final

SIGN_MESSAGE_TEMPLATE: Final[str] = (
    "Sign in to {server_name}\n"
    "\n"
    "Nonce: {nonce}\n"
    "\n"
    "This signature will not trigger a blockchain transaction or cost any fees."
)


def format_sign_message(server_name: str, nonce: str) -> str:
    """Return the text a wallet must sign to log in.

    The wording is shown verbatim in the wallet's signing prompt, so it states
    plainly that signing costs nothing. Verification re-renders the same text,
    which means any change here invalidates every outstanding challenge.
    """
    return SIGN_MESSAGE_TEMPLATE.format(server_name=server_name, nonce=nonce)
