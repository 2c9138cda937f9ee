"""Account collaborators used after a wallet login succeeds."""

from __future__ import annotations

from dataclasses import dataclass, field
from threading import Lock
from typing import Protocol


class AccountDirectory(Protocol):
    """Operations the login endpoint needs from account storage."""

    def exists(self, user_id: str) -> bool: ...

    def create(self, user_id: str) -> None: ...

    def create_if_missing(self, user_id: str, display_name: str | None = None) -> bool: ...

    def set_display_name(self, user_id: str, display_name: str | None) -> None: ...

    def get_display_name(self, user_id: str) -> str | None: ...

    def has_device(self, user_id: str, device_id: str) -> bool: ...

    def create_device(
        self,
        user_id: str,
        device_id: str,
        token: str,
        display_name: str | None = None,
    ) -> None: ...

    def set_token(self, user_id: str, device_id: str, token: str) -> None: ...


class AccountError(RuntimeError):
    """Raised when an account operation targets a missing account or device."""


@dataclass
class Device:
    """A logged-in device and its current access token."""

    device_id: str
    token: str
    display_name: str | None = None


@dataclass
class Account:
    """Password-less account created on first wallet login."""

    user_id: str
    display_name: str | None = None
    devices: dict[str, Device] = field(default_factory=dict)


class InMemoryAccountDirectory:
    """Thread-safe account directory kept in process memory."""

    def __init__(self) -> None:
        self._accounts: dict[str, Account] = {}
        self._lock = Lock()

    def _get(self, user_id: str) -> Account:
        account = self._accounts.get(user_id)
        if account is None:
            raise AccountError(f"Unknown account {user_id}")
        return account

    def exists(self, user_id: str) -> bool:
        with self._lock:
            return user_id in self._accounts

    def create(self, user_id: str) -> None:
        with self._lock:
            if user_id in self._accounts:
                raise AccountError(f"Account {user_id} already exists")
            self._accounts[user_id] = Account(user_id=user_id)

    def create_if_missing(self, user_id: str, display_name: str | None = None) -> bool:
        """Create and label the account unless it exists; True if it was created."""
        with self._lock:
            if user_id in self._accounts:
                return False
            self._accounts[user_id] = Account(user_id=user_id, display_name=display_name)
            return True

    def set_display_name(self, user_id: str, display_name: str | None) -> None:
        with self._lock:
            self._get(user_id).display_name = display_name

    def get_display_name(self, user_id: str) -> str | None:
        with self._lock:
            return self._get(user_id).display_name

    def has_device(self, user_id: str, device_id: str) -> bool:
        with self._lock:
            account = self._accounts.get(user_id)
            return account is not None and device_id in account.devices

    def create_device(
        self,
        user_id: str,
        device_id: str,
        token: str,
        display_name: str | None = None,
    ) -> None:
        with self._lock:
            self._get(user_id).devices[device_id] = Device(
                device_id=device_id,
                token=token,
                display_name=display_name,
            )

    def set_token(self, user_id: str, device_id: str, token: str) -> None:
        with self._lock:
            device = self._get(user_id).devices.get(device_id)
            if device is None:
                raise AccountError(f"Unknown device {device_id} for {user_id}")
            device.token = token


_ACCOUNT_DIRECTORY = InMemoryAccountDirectory()


def get_account_directory() -> AccountDirectory:
    """Return the process-wide account directory."""
    return _ACCOUNT_DIRECTORY
