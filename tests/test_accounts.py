"""Tests for the in-memory account directory."""

import threading

import pytest

from wallet_signin.services.accounts import AccountError, InMemoryAccountDirectory

USER = "@" + "ab" * 32 + ":chat.example.com"


def test_create_and_label_account() -> None:
    accounts = InMemoryAccountDirectory()
    assert accounts.exists(USER) is False
    accounts.create(USER)
    accounts.set_display_name(USER, "Wallet")
    assert accounts.exists(USER) is True
    assert accounts.get_display_name(USER) == "Wallet"


def test_create_twice_fails() -> None:
    accounts = InMemoryAccountDirectory()
    accounts.create(USER)
    with pytest.raises(AccountError):
        accounts.create(USER)


def test_devices() -> None:
    accounts = InMemoryAccountDirectory()
    accounts.create(USER)
    assert accounts.has_device(USER, "DEV") is False
    accounts.create_device(USER, "DEV", "token-1", "Laptop")
    assert accounts.has_device(USER, "DEV") is True
    accounts.set_token(USER, "DEV", "token-2")


def test_operations_on_missing_account() -> None:
    accounts = InMemoryAccountDirectory()
    assert accounts.has_device(USER, "DEV") is False
    with pytest.raises(AccountError):
        accounts.set_display_name(USER, "x")
    with pytest.raises(AccountError):
        accounts.create_device(USER, "DEV", "token")


def test_set_token_for_unknown_device() -> None:
    accounts = InMemoryAccountDirectory()
    accounts.create(USER)
    with pytest.raises(AccountError):
        accounts.set_token(USER, "NOPE", "token")


def test_create_if_missing_labels_once() -> None:
    accounts = InMemoryAccountDirectory()
    assert accounts.create_if_missing(USER, "Wallet") is True
    assert accounts.create_if_missing(USER, "Other") is False
    assert accounts.get_display_name(USER) == "Wallet"


def test_concurrent_create_if_missing_creates_once() -> None:
    accounts = InMemoryAccountDirectory()
    workers = 16
    barrier = threading.Barrier(workers)
    results: list[bool] = []
    results_lock = threading.Lock()

    def register() -> None:
        barrier.wait()
        created = accounts.create_if_missing(USER, "Wallet")
        with results_lock:
            results.append(created)

    threads = [threading.Thread(target=register) for _ in range(workers)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert results.count(True) == 1
    assert len(results) == workers
