"""Navigation and registry snapshot models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from dropin.core.hasher import content_address
from dropin.models.components import ComponentRecord, NavOrder


class NavigationEntry(BaseModel):
    """A menu item derived from a component's ``nav`` and primary route."""

    model_config = ConfigDict(frozen=True)

    label: str
    path: str
    order: NavOrder | None = None


class RegistrySnapshot(BaseModel):
    """The single immutable value a successful pass hands to the writers.

    Holds every admissible component and the computed navigation.  The
    ``digest`` is a content address over both, so two passes over an
    unchanged tree yield the same digest.
    """

    model_config = ConfigDict(frozen=True)

    components: tuple[ComponentRecord, ...] = ()
    navigation: tuple[NavigationEntry, ...] = ()

    def component_data(self) -> list[dict]:
        return [c.model_dump(mode="json") for c in self.components]

    def navigation_data(self) -> list[dict]:
        return [n.model_dump(mode="json") for n in self.navigation]

    @property
    def digest(self) -> str:
        return content_address(
            {"components": self.component_data(), "navigation": self.navigation_data()}
        )
