"""Password-less login by Ed25519 wallet signature."""

__version__ = "0.1.0"
