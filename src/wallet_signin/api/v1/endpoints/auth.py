"""Login endpoints for the Wallet Sign-in API."""

from __future__ import annotations

import logging
import secrets
import string
from datetime import UTC, datetime, timedelta
from typing import Annotated

from fastapi import APIRouter, Body, Depends, HTTPException, status
from jose import jwt

from wallet_signin.core.errors import FeatureDisabledError, WalletAuthError
from wallet_signin.core.settings import settings
from wallet_signin.schemas.auth import (
    APPSERVICE_LOGIN,
    PASSWORD_LOGIN,
    WALLET_SIGNATURE_LOGIN,
    LoginFlow,
    LoginRequest,
    LoginResponse,
    LoginTypesResponse,
    NonceRequest,
    NonceResponse,
    WalletSignatureLogin,
)
from wallet_signin.services.accounts import AccountDirectory, get_account_directory
from wallet_signin.services.identity import (
    DerivedIdentity,
    address_from_canonical_id,
    qualified_user_id,
)
from wallet_signin.services.wallet_auth import WalletAuthService, get_wallet_auth_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/login", tags=["authentication"])

_DEVICE_ID_ALPHABET = string.ascii_uppercase


def get_wallet_auth_service_dep() -> WalletAuthService:
    return get_wallet_auth_service()


def get_account_directory_dep() -> AccountDirectory:
    return get_account_directory()


WalletAuthDep = Annotated[WalletAuthService, Depends(get_wallet_auth_service_dep)]
AccountsDep = Annotated[AccountDirectory, Depends(get_account_directory_dep)]


def _error(status_code: int, errcode: str, message: str) -> HTTPException:
    return HTTPException(
        status_code=status_code,
        detail={"errcode": errcode, "error": message},
    )


def _random_device_id(length: int) -> str:
    return "".join(secrets.choice(_DEVICE_ID_ALPHABET) for _ in range(length))


def create_access_token(user_id: str, device_id: str) -> str:
    """Create a JWT access token bound to a user and device."""
    expire = datetime.now(UTC) + timedelta(minutes=settings.access_token_expire_minutes)
    to_encode: dict[str, object] = {"sub": user_id, "device_id": device_id, "exp": expire}
    encoded_jwt: str = jwt.encode(
        to_encode,
        settings.secret_key,
        algorithm=settings.jwt_algorithm,
    )
    return encoded_jwt


def _provision_account(accounts: AccountDirectory, user_id: str, identity: DerivedIdentity) -> None:
    """Create the account on first login and label it with the wallet address.

    Concurrent first logins for the same wallet race on ``create_if_missing``;
    exactly one of them registers the account.
    """
    if not accounts.create_if_missing(user_id, identity.display_label):
        return
    logger.info(
        "New wallet user registered: %s (%s)",
        address_from_canonical_id(identity.canonical_id),
        user_id,
    )


def _issue_session(
    accounts: AccountDirectory,
    user_id: str,
    payload: WalletSignatureLogin,
) -> tuple[str, str]:
    """Create or refresh the device and return ``(device_id, access_token)``."""
    device_id = payload.device_id or _random_device_id(settings.device_id_length)
    token = create_access_token(user_id, device_id)
    if payload.device_id is not None and accounts.has_device(user_id, device_id):
        accounts.set_token(user_id, device_id, token)
    else:
        accounts.create_device(
            user_id,
            device_id,
            token,
            payload.initial_device_display_name,
        )
    return device_id, token


@router.get(
    "",
    summary="List supported login types",
    response_model=LoginTypesResponse,
)
async def get_login_types(wallet_auth: WalletAuthDep) -> LoginTypesResponse:
    """Advertise the login types clients may use.

    The wallet signature type is listed only when the service that would
    handle it is enabled.
    """
    kinds = [PASSWORD_LOGIN, APPSERVICE_LOGIN]
    if wallet_auth.enabled:
        kinds.append(WALLET_SIGNATURE_LOGIN)
    return LoginTypesResponse(flows=[LoginFlow(type=kind) for kind in kinds])


@router.post(
    "/nonce",
    summary="Issue a wallet signature challenge",
    response_model=NonceResponse,
)
async def request_nonce(payload: NonceRequest, wallet_auth: WalletAuthDep) -> NonceResponse:
    """Provide a single-use challenge for the given wallet address."""
    try:
        challenge = wallet_auth.issue_challenge(payload.address)
    except FeatureDisabledError as err:
        raise _error(status.HTTP_403_FORBIDDEN, "M_UNKNOWN", str(err)) from err
    except WalletAuthError as err:
        raise _error(status.HTTP_400_BAD_REQUEST, "M_INVALID_PARAM", str(err)) from err

    return NonceResponse(
        nonce=challenge.nonce,
        message=challenge.message,
        expires_in_seconds=challenge.expires_in_seconds,
    )


@router.post(
    "",
    summary="Log in",
    response_model=LoginResponse,
)
async def login(
    payload: Annotated[LoginRequest, Body(discriminator="type")],
    wallet_auth: WalletAuthDep,
    accounts: AccountsDep,
) -> LoginResponse:
    """Authenticate and return an access token for a device.

    Only wallet signature logins are served here; the standard types are
    recognised so clients get a clear rejection instead of a schema error.
    """
    if not isinstance(payload, WalletSignatureLogin):
        raise _error(
            status.HTTP_400_BAD_REQUEST,
            "M_UNRECOGNIZED",
            f"Login type {payload.type} is not supported by this server.",
        )

    try:
        identity = wallet_auth.complete_login(payload.address, payload.signature, payload.nonce)
    except FeatureDisabledError as err:
        raise _error(status.HTTP_403_FORBIDDEN, "M_UNKNOWN", str(err)) from err
    except WalletAuthError as err:
        logger.warning("Rejected wallet login for %s: %s", payload.address, err.reason)
        raise _error(status.HTTP_403_FORBIDDEN, "M_FORBIDDEN", str(err)) from err

    user_id = qualified_user_id(identity.canonical_id, wallet_auth.server_name)
    _provision_account(accounts, user_id, identity)
    device_id, token = _issue_session(accounts, user_id, payload)
    logger.info("%s logged in via wallet signature", user_id)

    return LoginResponse(
        user_id=user_id,
        access_token=token,
        device_id=device_id,
        home_server=wallet_auth.server_name,
        canonical_id=identity.canonical_id,
        display_label=identity.display_label,
    )
