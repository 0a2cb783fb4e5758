"""Tests for feature toggle models and helpers."""
import logging

import pytest

from skeletor.models.features import (
    FeatureCategory,
    FeatureSelection,
    FeatureToggles,
    feature_enabled,
    has_feature,
    join_features,
    split_features,
)


class TestFeatureListHelpers:
    def test_split_trims_and_drops_blanks(self):
        assert split_features(" rbac, ,sso,") == ["rbac", "sso"]

    def test_split_empty(self):
        assert split_features("") == []
        assert split_features(None) == []

    def test_join(self):
        assert join_features(["soc2", "gdpr"]) == "soc2,gdpr"

    def test_has_feature(self):
        assert has_feature("rate_limiting,secure_headers", "secure_headers")
        assert not has_feature("rate_limiting", "rate")

    def test_feature_enabled_requires_flag(self):
        variables = {"EnableSecurity": False, "SecurityFeatures": "rate_limiting"}
        assert not feature_enabled(variables, "security", "rate_limiting")

        variables["EnableSecurity"] = True
        assert feature_enabled(variables, "security", "rate_limiting")
        assert not feature_enabled(variables, "security", "secure_headers")

    def test_feature_enabled_unknown_category(self):
        assert not feature_enabled({"EnableSecurity": True}, "billing", "invoices")


class TestFeatureToggles:
    """Test the feature_toggles block of a configuration document."""

    @pytest.fixture
    def toggles(self):
        return FeatureToggles.model_validate({
            "security": {"enabled": True, "input_validation": True, "rate_limiting": False},
            "compliance": {"enabled": True, "soc2": True, "custom": {"iso27001": True, "fedramp": False}},
            "auth": {"enabled": False, "rbac": True},
        })

    def test_selection_from_toggles(self, toggles):
        selection = FeatureSelection.from_toggles(toggles)
        assert selection.is_enabled(FeatureCategory.SECURITY)
        assert selection.features[FeatureCategory.SECURITY] == ["input_validation"]
        assert selection.features[FeatureCategory.COMPLIANCE] == ["soc2", "iso27001"]
        assert not selection.is_enabled(FeatureCategory.AUTH)
        assert FeatureCategory.AUTH not in selection.features
        assert not selection.is_enabled(FeatureCategory.OBSERVABILITY)

    def test_enabled_features(self, toggles):
        assert toggles.enabled_features() == {
            "security": ["input_validation"],
            "compliance": ["soc2", "iso27001"],
        }

    def test_unknown_keys_rejected(self):
        with pytest.raises(ValueError):
            FeatureToggles.model_validate({"security": {"enabled": True, "firewall": True}})


class TestFeatureSelection:
    def test_from_flags_normalizes(self):
        selection = FeatureSelection.from_flags(
            enable_auth=True, auth_features="rbac, sso ,rbac"
        )
        assert selection.is_enabled(FeatureCategory.AUTH)
        assert selection.features[FeatureCategory.AUTH] == ["rbac", "sso"]

    def test_as_variables(self):
        selection = FeatureSelection.from_flags(
            enable_compliance=True, compliance_frameworks="soc2,gdpr"
        )
        variables = selection.as_variables()
        assert variables["EnableCompliance"] is True
        assert variables["ComplianceFrameworks"] == "soc2,gdpr"
        assert variables["EnableSecurity"] is False
        assert variables["SecurityFeatures"] == ""

    def test_unknown_security_feature_warns(self, caplog):
        with caplog.at_level(logging.WARNING):
            FeatureSelection.from_flags(enable_security=True, security_features="firewall")
        assert "Unknown security feature 'firewall'" in caplog.text

    def test_overlay_prefers_explicit_selection(self):
        base = FeatureSelection.from_toggles(FeatureToggles.model_validate(
            {"security": {"enabled": True, "secure_headers": True}}
        ))
        merged = base.overlay(FeatureSelection.from_flags(
            enable_security=True, security_features="rate_limiting"
        ))
        assert merged.features[FeatureCategory.SECURITY] == ["rate_limiting"]

        kept = base.overlay(FeatureSelection.from_flags())
        assert kept.features[FeatureCategory.SECURITY] == ["secure_headers"]
        assert kept.is_enabled(FeatureCategory.SECURITY)
