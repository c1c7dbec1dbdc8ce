"""Shared utilities: UTC datetime helpers."""

from mrcars_admin.shared.utils.datetime import (
    add_months,
    ensure_utc,
    month_label,
    month_start,
    parse_iso_utc,
    utc_now,
)

__all__ = [
    "utc_now",
    "ensure_utc",
    "parse_iso_utc",
    "month_start",
    "add_months",
    "month_label",
]
