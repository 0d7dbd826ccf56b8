# This file handles limit/offset parsing for the product list endpoint.
# It exists so raw query strings are turned into a bounded window before any SQL runs.
# Unparseable or out-of-range values fall back to defaults instead of failing the request.

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ListWindow:
    start: int
    count: int


def _parse_int(raw: str | None) -> int | None:
    if raw is None:
        return None
    try:
        return int(raw.strip())
    except ValueError:
        return None


def normalize_list_window(
    *,
    count: str | None,
    start: str | None,
    default_count: int,
    max_count: int,
) -> ListWindow:
    """Resolve `count`/`start` query values into a safe window."""

    resolved_count = _parse_int(count)
    if resolved_count is None or resolved_count < 1:
        resolved_count = default_count
    resolved_count = min(resolved_count, max_count)

    resolved_start = _parse_int(start)
    if resolved_start is None or resolved_start < 0:
        resolved_start = 0

    return ListWindow(start=resolved_start, count=resolved_count)
