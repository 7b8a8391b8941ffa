"""Discovery profile models — the naming conventions of a discovery flavour."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class DiscoveryProfile(BaseModel):
    """Filenames and generated symbol names for one discovery convention.

    A folder is a component when it holds both ``meta_filename`` and
    ``module_filename``.  The generator names each component's module class
    ``<PascalCaseId><symbol_suffix>`` and the composed container
    ``container_name``.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    meta_filename: str
    module_filename: str
    symbol_suffix: str
    container_name: str
    registry_filename: str
    aggregator_filename: str


COMPONENT_PROFILE = DiscoveryProfile(
    name="component",
    meta_filename="component.json",
    module_filename="component.py",
    symbol_suffix="ComponentModule",
    container_name="GeneratedComponentsModule",
    registry_filename="components_registry.py",
    aggregator_filename="generated_components.py",
)

FEATURE_PROFILE = DiscoveryProfile(
    name="feature",
    meta_filename="feature.json",
    module_filename="feature.py",
    symbol_suffix="FeatureModule",
    container_name="GeneratedFeaturesModule",
    registry_filename="features_registry.py",
    aggregator_filename="generated_features.py",
)

PROFILES: dict[str, DiscoveryProfile] = {
    COMPONENT_PROFILE.name: COMPONENT_PROFILE,
    FEATURE_PROFILE.name: FEATURE_PROFILE,
}
