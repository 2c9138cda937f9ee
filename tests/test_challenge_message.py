"""Tests for the challenge message wallets are asked to sign."""

from wallet_signin.services.challenge import format_sign_message


def test_message_matches_wallet_prompt_text() -> None:
    message = format_sign_message("chat.example.com", "abc123def456")
    assert message == (
        "Sign in to chat.example.com\n\n"
        "Nonce: abc123def456\n\n"
        "This signature will not trigger a blockchain transaction or cost any fees."
    )


def test_message_is_deterministic() -> None:
    assert format_sign_message("a.example", "ff" * 32) == format_sign_message("a.example", "ff" * 32)


def test_message_binds_server_and_nonce() -> None:
    base = format_sign_message("chat.example.com", "nonce-1")
    assert format_sign_message("evil.example.com", "nonce-1") != base
    assert format_sign_message("chat.example.com", "nonce-2") != base


def test_message_states_no_cost() -> None:
    assert "will not trigger a blockchain transaction" in format_sign_message("x", "y")
