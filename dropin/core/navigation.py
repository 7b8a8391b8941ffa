"""Navigation composer — derives the ordered menu from admissible components.

Ordering is total and independent of discovery order:

1. ``order`` ascending; entries without an order come after every entry
   that has one.
2. Label, compared locale-style: accents stripped, case folded.
3. The raw label, then the path, so no two distinct entries compare equal.
"""

from __future__ import annotations

import unicodedata
from collections.abc import Iterable

from dropin.models.components import ComponentRecord
from dropin.models.navigation import NavigationEntry


def collation_key(label: str) -> str:
    """Accent- and case-insensitive comparison key for a menu label."""
    decomposed = unicodedata.normalize("NFKD", label)
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return stripped.casefold()


def navigation_sort_key(entry: NavigationEntry) -> tuple:
    has_no_order = entry.order is None
    return (
        has_no_order,
        0 if has_no_order else entry.order,
        collation_key(entry.label),
        entry.label,
        entry.path,
    )


def compose_navigation(records: Iterable[ComponentRecord]) -> list[NavigationEntry]:
    """Build the sorted navigation list from records that declare ``nav``."""
    entries: list[NavigationEntry] = []
    for record in records:
        if record.nav is None:
            continue
        route = record.primary_route()
        if route is None or not route.path:
            continue
        entries.append(
            NavigationEntry(
                label=record.nav.label or "",
                path=route.path,
                order=record.nav.order,
            )
        )
    return sorted(entries, key=navigation_sort_key)
