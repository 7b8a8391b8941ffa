"""Dropin data models — all Pydantic v2, all frozen (immutable)."""

from dropin.models.artifacts import GeneratedArtifacts, PassResult
from dropin.models.components import ComponentRecord, NavDescriptor, RouteDescriptor
from dropin.models.config import (
    COMPONENT_PROFILE,
    FEATURE_PROFILE,
    PROFILES,
    DiscoveryProfile,
)
from dropin.models.issues import (
    DEFAULT_NAV_PRIMARY_POLICY,
    NavPrimaryPolicy,
    ScanResult,
    Severity,
    SkippedComponent,
    ValidationIssue,
    ValidationResult,
)
from dropin.models.navigation import NavigationEntry, RegistrySnapshot

__all__ = [
    # components
    "ComponentRecord",
    "RouteDescriptor",
    "NavDescriptor",
    # issues
    "Severity",
    "NavPrimaryPolicy",
    "DEFAULT_NAV_PRIMARY_POLICY",
    "ValidationIssue",
    "SkippedComponent",
    "ScanResult",
    "ValidationResult",
    # navigation
    "NavigationEntry",
    "RegistrySnapshot",
    # artifacts
    "GeneratedArtifacts",
    "PassResult",
    # profiles
    "DiscoveryProfile",
    "COMPONENT_PROFILE",
    "FEATURE_PROFILE",
    "PROFILES",
]
