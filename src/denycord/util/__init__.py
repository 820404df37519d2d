"""Shared utilities: logging setup and low-level Discord helpers."""
