"""Tests for discovery settings — env-driven via pydantic-settings."""

from __future__ import annotations

from pathlib import Path

import pytest

from dropin.config import DEFAULT_EXCLUDED_DIRS, DiscoverySettings
from dropin.models.config import COMPONENT_PROFILE, FEATURE_PROFILE
from dropin.models.issues import NavPrimaryPolicy


class TestDiscoverySettings:
    def test_defaults(self):
        settings = DiscoverySettings()
        assert settings.components_dir == Path("src/components")
        assert settings.output_dir == Path("src/components_generated")
        assert settings.profile == "component"
        assert settings.nav_primary_policy == NavPrimaryPolicy.FALLBACK
        assert settings.log_level == "INFO"

    def test_default_exclusions(self):
        assert DiscoverySettings().excluded_dirs == list(DEFAULT_EXCLUDED_DIRS)

    def test_paths_resolve_against_root(self, tmp_path: Path):
        settings = DiscoverySettings(root_dir=tmp_path)
        assert settings.components_path == (tmp_path / "src" / "components").resolve()
        assert settings.output_path == (tmp_path / "src" / "components_generated").resolve()

    def test_profile_lookup(self):
        assert DiscoverySettings().discovery_profile is COMPONENT_PROFILE
        assert DiscoverySettings(profile="feature").discovery_profile is FEATURE_PROFILE

    def test_unknown_profile_raises(self):
        with pytest.raises(ValueError, match="Unknown discovery profile"):
            DiscoverySettings(profile="widget").discovery_profile

    def test_env_overrides(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("DROPIN_PROFILE", "feature")
        monkeypatch.setenv("DROPIN_NAV_PRIMARY_POLICY", "strict")
        monkeypatch.setenv("DROPIN_DEBOUNCE_SECONDS", "1.5")
        settings = DiscoverySettings()
        assert settings.profile == "feature"
        assert settings.nav_primary_policy == NavPrimaryPolicy.STRICT
        assert settings.debounce_seconds == 1.5


class TestProfiles:
    def test_component_profile_filenames(self):
        assert COMPONENT_PROFILE.meta_filename == "component.json"
        assert COMPONENT_PROFILE.module_filename == "component.py"
        assert COMPONENT_PROFILE.container_name == "GeneratedComponentsModule"

    def test_feature_profile_filenames(self):
        assert FEATURE_PROFILE.meta_filename == "feature.json"
        assert FEATURE_PROFILE.symbol_suffix == "FeatureModule"
        assert FEATURE_PROFILE.registry_filename == "features_registry.py"
