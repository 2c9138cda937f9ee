"""HTTP API for Wallet Sign-in."""
