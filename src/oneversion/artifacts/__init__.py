"""Deterministic serialization of planned actions."""
