"""Shared cross-cutting helpers: telemetry and UTC datetime utilities."""
