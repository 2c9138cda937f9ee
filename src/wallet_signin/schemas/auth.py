"""Login-related Pydantic schemas."""

from typing import Literal

from pydantic import BaseModel, Field

PASSWORD_LOGIN = "m.login.password"
APPSERVICE_LOGIN = "m.login.application_service"
WALLET_SIGNATURE_LOGIN = "m.login.solana.signature"


class NonceRequest(BaseModel):
    """Request for a wallet login challenge."""

    address: str = Field(..., description="Base58-encoded Ed25519 public key (32 bytes)")


class NonceResponse(BaseModel):
    """Challenge the wallet has to sign."""

    nonce: str = Field(..., description="Single-use nonce (64 lowercase hex characters)")
    message: str = Field(..., description="Exact text the wallet must sign")
    expires_in_seconds: int = Field(..., description="Seconds before the nonce expires")


class _LoginBase(BaseModel):
    device_id: str | None = Field(None, description="Existing device to refresh")
    initial_device_display_name: str | None = Field(
        None,
        description="Display name for a newly created device",
    )


class PasswordLogin(_LoginBase):
    """Standard password login."""

    type: Literal["m.login.password"]
    identifier: dict[str, str] | None = None
    user: str | None = None
    password: str | None = None


class ApplicationServiceLogin(_LoginBase):
    """Standard application service login."""

    type: Literal["m.login.application_service"]
    identifier: dict[str, str] | None = None


class WalletSignatureLogin(_LoginBase):
    """Login by signing a previously issued challenge with a wallet key."""

    type: Literal["m.login.solana.signature"]
    address: str = Field(..., description="Base58-encoded Ed25519 public key (32 bytes)")
    signature: str = Field(..., description="Base58-encoded Ed25519 signature (64 bytes)")
    nonce: str = Field(..., description="Nonce returned by the challenge endpoint")


LoginRequest = PasswordLogin | ApplicationServiceLogin | WalletSignatureLogin


class LoginResponse(BaseModel):
    """Response returned after a successful login."""

    user_id: str = Field(..., description="Fully qualified user id")
    access_token: str = Field(..., description="JWT access token")
    device_id: str = Field(..., description="Device the token is bound to")
    home_server: str = Field(..., description="Server name that issued the token")
    canonical_id: str = Field(..., description="Lowercase hex rendering of the public key")
    display_label: str = Field(..., description="Wallet address as supplied by the client")


class LoginFlow(BaseModel):
    """A single advertised login type."""

    type: str


class LoginTypesResponse(BaseModel):
    """Login types supported by this server."""

    flows: list[LoginFlow]
