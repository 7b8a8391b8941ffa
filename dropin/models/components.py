"""Component descriptor models — one record per discovered component folder.

Records are built fresh on every discovery pass and never patched in place.
Required-ness of ``id``, ``title`` and ``routes`` is deliberately *not*
enforced here: a record with missing fields must still reach the validator so
the problem is reported as a validation issue against its source folder.
"""

from __future__ import annotations

from pathlib import Path
from typing import Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, FiniteFloat

# NaN and infinities have no sort position and no literal form in the registry.
NavOrder = Union[int, FiniteFloat]


class RouteDescriptor(BaseModel):
    """A single route exposed by a component.

    Examples
    --------
    >>> RouteDescriptor.model_validate({"path": "/demo", "title": "Demo", "isPrimary": True})
    RouteDescriptor(path='/demo', title='Demo', is_primary=True)
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    path: str | None = None
    title: str | None = None
    is_primary: bool = Field(
        default=False,
        validation_alias=AliasChoices("is_primary", "isPrimary"),
    )


class NavDescriptor(BaseModel):
    """Navigation participation: a menu label and an optional sort order."""

    model_config = ConfigDict(frozen=True)

    label: str | None = None
    order: NavOrder | None = None  # lower sorts first; None sorts last


class ComponentRecord(BaseModel):
    """One discovered component, as declared by its metadata descriptor.

    ``source_path`` is the absolute folder the descriptor was found in.  It is
    used for diagnostics and to compute the generated import path of the
    component's module descriptor.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str | None = None
    title: str | None = None
    description: str | None = None
    routes: list[RouteDescriptor] = Field(default_factory=list)
    nav: NavDescriptor | None = None
    source_path: Path = Field(
        validation_alias=AliasChoices("source_path", "sourcePath"),
    )

    def primary_route(self) -> RouteDescriptor | None:
        """Return the explicit primary route, else the first declared route."""
        for route in self.routes:
            if route.is_primary:
                return route
        return self.routes[0] if self.routes else None

    @property
    def has_explicit_primary(self) -> bool:
        return any(route.is_primary for route in self.routes)
