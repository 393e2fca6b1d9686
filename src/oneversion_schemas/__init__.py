"""Packaged JSON Schemas for oneversion."""
