"""Component validator — consistency rules over one discovery batch.

The validator never raises: every problem is returned as a
``ValidationIssue`` and the decision to abort belongs to the orchestrator.
All records are visited so that one build reports every problem at once.

Rules, in order
---------------
1. ``id`` present, non-empty and convertible to a module class name
   (stops this record's checks).
2. ``title`` present and non-empty.
3. ``routes`` non-empty (stops this record's checks).
4. ``id`` unique across the batch, and distinct ids map to distinct
   module class names.
5. Each route has a ``path`` (else skip that route) and a ``title``.
6. Route ``path`` unique across the batch.
7. At most one ``is_primary`` route.
8. ``nav`` needs a ``label`` and a resolvable primary route; see
   ``NavPrimaryPolicy``.

Rules 4 and 6 are batch-level collisions: they are errors, but they do not
make either party inadmissible on its own.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path

from dropin.core.naming import pascal_case
from dropin.models.components import ComponentRecord
from dropin.models.config import COMPONENT_PROFILE
from dropin.models.issues import (
    DEFAULT_NAV_PRIMARY_POLICY,
    NavPrimaryPolicy,
    Severity,
    ValidationIssue,
    ValidationResult,
)

logger = logging.getLogger(__name__)

UNKNOWN_COMPONENT_ID = "unknown"


class ComponentValidator:
    """Validates a batch of scanned component records.

    Parameters
    ----------
    nav_policy:
        Severity policy for ``nav`` without an explicit primary route.
    meta_filename:
        Descriptor filename, used to build issue locations.
    kind:
        Noun used in messages, the active profile name (``component`` or
        ``feature``).
    symbol_suffix:
        Suffix of generated module class names, used in clash messages.
    """

    def __init__(
        self,
        nav_policy: NavPrimaryPolicy = DEFAULT_NAV_PRIMARY_POLICY,
        *,
        meta_filename: str = COMPONENT_PROFILE.meta_filename,
        kind: str = COMPONENT_PROFILE.name,
        symbol_suffix: str = COMPONENT_PROFILE.symbol_suffix,
    ) -> None:
        self.nav_policy = nav_policy
        self._meta_filename = meta_filename
        self._kind = kind
        self._symbol_suffix = symbol_suffix

    def validate(self, records: Sequence[ComponentRecord]) -> ValidationResult:
        issues: list[ValidationIssue] = []
        inadmissible: set[int] = set()
        seen_ids: dict[str, ComponentRecord] = {}
        seen_paths: dict[str, ComponentRecord] = {}
        seen_symbols: dict[str, ComponentRecord] = {}

        for index, record in enumerate(records):
            structural = self._check_record(
                record, seen_ids, seen_paths, seen_symbols, issues
            )
            if structural:
                inadmissible.add(index)

        admissible = [r for i, r in enumerate(records) if i not in inadmissible]
        logger.debug(
            "Validated %d component(s): %d admissible, %d issue(s).",
            len(records),
            len(admissible),
            len(issues),
        )
        return ValidationResult(admissible=admissible, issues=issues)

    # -- Rules --------------------------------------------------------------

    def _check_record(
        self,
        record: ComponentRecord,
        seen_ids: dict[str, ComponentRecord],
        seen_paths: dict[str, ComponentRecord],
        seen_symbols: dict[str, ComponentRecord],
        issues: list[ValidationIssue],
    ) -> bool:
        """Run every rule for *record*; return True if it has a structural error."""
        location = str(Path(record.source_path) / self._meta_filename)
        kind = self._kind
        noun = kind.capitalize()

        def report(message: str, field: str, severity: Severity = Severity.ERROR) -> None:
            issues.append(
                ValidationIssue(
                    component_id=record.id or UNKNOWN_COMPONENT_ID,
                    severity=severity,
                    message=message,
                    location=location,
                    field=field,
                )
            )

        if not record.id:
            report(
                f"{noun} at {record.source_path} is missing required 'id' field", "id"
            )
            return True

        structural = False
        cid = record.id

        symbol = pascal_case(cid)
        if not symbol or not symbol.isidentifier():
            report(
                f"{noun} id '{cid}' does not convert to a valid module name "
                "(use letters, digits, '-' or '_', starting with a letter)",
                "id",
            )
            return True

        if not record.title:
            report(f"{noun} '{cid}' is missing required 'title' field", "title")
            structural = True

        if not record.routes:
            report(f"{noun} '{cid}' must have at least one route", "routes")
            return True

        other = seen_ids.get(cid)
        if other is not None:
            report(
                f"Duplicate {kind} ID '{cid}' found in: "
                f"{other.source_path}, {record.source_path}",
                "id",
            )
        else:
            seen_ids[cid] = record
            # Distinct ids may still collapse to one aggregator class name.
            clash = seen_symbols.get(symbol)
            if clash is not None:
                report(
                    f"{noun} ids '{clash.id}' and '{cid}' both map to module class "
                    f"'{symbol}{self._symbol_suffix}'",
                    "id",
                )
            else:
                seen_symbols[symbol] = record

        primary_count = 0
        for route in record.routes:
            if route.is_primary:
                primary_count += 1
            if not route.path:
                report(f"{noun} '{cid}' has a route missing 'path' field", "routes[].path")
                structural = True
                continue

            if not route.title:
                report(
                    f"{noun} '{cid}' route '{route.path}' is missing 'title' field",
                    "routes[].title",
                )
                structural = True

            owner = seen_paths.get(route.path)
            if owner is not None:
                report(
                    f"Duplicate route path '{route.path}' found in {kind}s "
                    f"'{owner.id}' and '{cid}'",
                    "routes[].path",
                )
            else:
                seen_paths[route.path] = record

        if primary_count > 1:
            report(
                f"{noun} '{cid}' has {primary_count} primary routes, "
                "but only one is allowed",
                "routes[].isPrimary",
            )
            structural = True

        if record.nav is not None:
            if not record.nav.label:
                report(f"{noun} '{cid}' has 'nav' but is missing 'nav.label'", "nav.label")
                structural = True
            if not record.has_explicit_primary:
                if self.nav_policy == NavPrimaryPolicy.STRICT:
                    report(
                        f"{noun} '{cid}' has 'nav' but no primary route. Explicitly "
                        "mark one route with isPrimary: true to indicate which route "
                        "the navigation should link to.",
                        "routes[].isPrimary",
                    )
                    structural = True
                else:
                    report(
                        f"{noun} '{cid}' has 'nav' but no primary route; navigation "
                        f"will link to the first route '{record.routes[0].path}'.",
                        "routes[].isPrimary",
                        Severity.WARNING,
                    )

        return structural


def validate_components(
    records: Sequence[ComponentRecord],
    nav_policy: NavPrimaryPolicy = DEFAULT_NAV_PRIMARY_POLICY,
    *,
    meta_filename: str = COMPONENT_PROFILE.meta_filename,
    kind: str = COMPONENT_PROFILE.name,
    symbol_suffix: str = COMPONENT_PROFILE.symbol_suffix,
) -> ValidationResult:
    """Validate *records* with a fresh ``ComponentValidator``."""
    validator = ComponentValidator(
        nav_policy, meta_filename=meta_filename, kind=kind, symbol_suffix=symbol_suffix
    )
    return validator.validate(records)
