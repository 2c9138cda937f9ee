"""Configuration, errors and signature primitives."""
