"""Unit tests (no network, no app)."""
