"""Enterprise feature toggles: categories, known features and selections."""
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterable, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from skeletor.core.logger import get_logger

logger = get_logger(__name__)


class FeatureCategory(str, Enum):
    """Feature categories a template can react to."""

    SECURITY = "security"
    COMPLIANCE = "compliance"
    AUTH = "auth"
    OBSERVABILITY = "observability"


class SecurityFeature(str, Enum):
    INPUT_VALIDATION = "input_validation"
    RATE_LIMITING = "rate_limiting"
    SECURE_HEADERS = "secure_headers"
    VULNERABILITY_SCANNING = "vulnerability_scanning"
    POLICY_ENFORCEMENT = "policy_enforcement"


class ComplianceFramework(str, Enum):
    SOC2 = "soc2"
    GDPR = "gdpr"
    HIPAA = "hipaa"
    PCI_DSS = "pci_dss"


class AuthFeature(str, Enum):
    RBAC = "rbac"
    LDAP = "ldap"
    SSO = "sso"
    MFA = "mfa"
    VAULT = "vault"
    SESSION_MANAGEMENT = "session_management"


class ObservabilityFeature(str, Enum):
    APM = "apm"
    INFRASTRUCTURE = "infrastructure"
    CUSTOM_METRICS = "custom_metrics"
    HEALTH_CHECKS = "health_checks"
    OPENTELEMETRY = "opentelemetry"
    AUDIT_LOGGING = "audit_logging"
    TRACING = "tracing"


@dataclass(frozen=True)
class CategorySpec:
    """How a category shows up in the variable map."""

    flag_key: str
    list_key: str
    known: frozenset
    extras_field: Optional[str]


CATEGORIES: Dict[FeatureCategory, CategorySpec] = {
    FeatureCategory.SECURITY: CategorySpec(
        "EnableSecurity", "SecurityFeatures",
        frozenset(f.value for f in SecurityFeature), None,
    ),
    FeatureCategory.COMPLIANCE: CategorySpec(
        "EnableCompliance", "ComplianceFrameworks",
        frozenset(f.value for f in ComplianceFramework), "custom",
    ),
    FeatureCategory.AUTH: CategorySpec(
        "EnableAuth", "AuthFeatures",
        frozenset(f.value for f in AuthFeature), "integrations",
    ),
    FeatureCategory.OBSERVABILITY: CategorySpec(
        "EnableObservability", "ObservabilityFeatures",
        frozenset(f.value for f in ObservabilityFeature), "backends",
    ),
}


def split_features(value) -> List[str]:
    """Split a comma-separated feature list, dropping blanks."""
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        items = value
    else:
        items = str(value).split(",")
    return [str(item).strip() for item in items if str(item).strip()]


def join_features(items: Iterable[str]) -> str:
    return ",".join(items)


def has_feature(value, feature: str) -> bool:
    """Return True when *feature* appears in a comma-separated list."""
    return feature in split_features(value)


def parse_category(category) -> Optional[FeatureCategory]:
    try:
        return FeatureCategory(category)
    except ValueError:
        return None


def feature_enabled(variables, category, feature: str) -> bool:
    """Check a category's enable flag and its feature list in a variable map."""
    parsed = parse_category(category)
    if parsed is None:
        return False
    spec = CATEGORIES[parsed]
    if variables.get(spec.flag_key) is not True:
        return False
    return has_feature(variables.get(spec.list_key, ""), feature)


# Configuration document models


class _CategoryToggles(BaseModel):
    model_config = ConfigDict(extra='forbid')

    enabled: bool = False

    def _extras(self) -> Dict[str, bool]:
        return {}

    def enabled_features(self) -> List[str]:
        if not self.enabled:
            return []
        names = [
            name for name, info in type(self).model_fields.items()
            if name != "enabled" and info.annotation is bool and getattr(self, name)
        ]
        names.extend(name for name, on in self._extras().items() if on)
        return names


class SecurityToggles(_CategoryToggles):
    input_validation: bool = False
    rate_limiting: bool = False
    secure_headers: bool = False
    vulnerability_scanning: bool = False
    policy_enforcement: bool = False


class PolicyConfig(BaseModel):
    """Compliance policy settings carried through to templates."""

    model_config = ConfigDict(extra='forbid')

    enabled: bool = False
    severity: str = ""
    rules: List[str] = Field(default_factory=list)
    exceptions: List[str] = Field(default_factory=list)


class ComplianceToggles(_CategoryToggles):
    soc2: bool = False
    gdpr: bool = False
    hipaa: bool = False
    pci_dss: bool = False
    custom: Dict[str, bool] = Field(default_factory=dict)
    policies: Dict[str, PolicyConfig] = Field(default_factory=dict)

    def _extras(self) -> Dict[str, bool]:
        return self.custom


class AuthToggles(_CategoryToggles):
    rbac: bool = False
    ldap: bool = False
    sso: bool = False
    mfa: bool = False
    vault: bool = False
    session_management: bool = False
    integrations: Dict[str, bool] = Field(default_factory=dict)

    def _extras(self) -> Dict[str, bool]:
        return self.integrations


class ObservabilityToggles(_CategoryToggles):
    apm: bool = False
    infrastructure: bool = False
    custom_metrics: bool = False
    health_checks: bool = False
    opentelemetry: bool = False
    audit_logging: bool = False
    tracing: bool = False
    backends: Dict[str, bool] = Field(default_factory=dict)

    def _extras(self) -> Dict[str, bool]:
        return self.backends


class FeatureToggles(BaseModel):
    """The feature_toggles block of a template configuration document."""

    model_config = ConfigDict(extra='forbid')

    security: Optional[SecurityToggles] = None
    compliance: Optional[ComplianceToggles] = None
    auth: Optional[AuthToggles] = None
    observability: Optional[ObservabilityToggles] = None

    def _category(self, category: FeatureCategory) -> Optional[_CategoryToggles]:
        return getattr(self, category.value)

    def enabled_features(self) -> Dict[str, List[str]]:
        """Enabled features keyed by category; categories with none are omitted."""
        enabled = {}
        for category in FeatureCategory:
            toggles = self._category(category)
            if toggles is None:
                continue
            names = toggles.enabled_features()
            if names:
                enabled[category.value] = names
        return enabled


@dataclass
class FeatureSelection:
    """Per-category enable flags and feature lists chosen for a run."""

    enabled: Dict[FeatureCategory, bool] = field(default_factory=dict)
    features: Dict[FeatureCategory, List[str]] = field(default_factory=dict)

    @classmethod
    def from_flags(
        cls,
        enable_security: bool = False,
        enable_compliance: bool = False,
        enable_auth: bool = False,
        enable_observability: bool = False,
        security_features: str = "",
        compliance_frameworks: str = "",
        auth_features: str = "",
        observability_features: str = "",
    ) -> "FeatureSelection":
        selection = cls(
            enabled={
                FeatureCategory.SECURITY: enable_security,
                FeatureCategory.COMPLIANCE: enable_compliance,
                FeatureCategory.AUTH: enable_auth,
                FeatureCategory.OBSERVABILITY: enable_observability,
            },
            features={
                FeatureCategory.SECURITY: _normalize(security_features),
                FeatureCategory.COMPLIANCE: _normalize(compliance_frameworks),
                FeatureCategory.AUTH: _normalize(auth_features),
                FeatureCategory.OBSERVABILITY: _normalize(observability_features),
            },
        )
        selection.warn_unknown()
        return selection

    @classmethod
    def from_toggles(cls, toggles: Optional[FeatureToggles]) -> "FeatureSelection":
        """Build a selection from a configuration document's feature_toggles."""
        selection = cls()
        if toggles is None:
            return selection
        enabled = toggles.enabled_features()
        for category in FeatureCategory:
            category_toggles = getattr(toggles, category.value)
            if category_toggles is not None and category_toggles.enabled:
                selection.enabled[category] = True
                selection.features[category] = list(enabled.get(category.value, []))
        return selection

    def is_enabled(self, category: FeatureCategory) -> bool:
        return self.enabled.get(category, False)

    def overlay(self, other: "FeatureSelection") -> "FeatureSelection":
        """Return a selection where categories enabled or listed in *other* win."""
        merged = FeatureSelection(dict(self.enabled), {k: list(v) for k, v in self.features.items()})
        for category in FeatureCategory:
            if other.is_enabled(category):
                merged.enabled[category] = True
            if other.features.get(category):
                merged.features[category] = list(other.features[category])
        return merged

    def warn_unknown(self) -> None:
        for category, names in self.features.items():
            spec = CATEGORIES[category]
            for name in names:
                if name not in spec.known:
                    if spec.extras_field is None:
                        logger.warning(f"Unknown {category.value} feature '{name}'")
                    else:
                        logger.debug(f"Custom {category.value} entry '{name}'")

    def as_variables(self) -> Dict[str, object]:
        """Render the selection into its Enable*/list variable keys."""
        variables: Dict[str, object] = {}
        for category, spec in CATEGORIES.items():
            variables[spec.flag_key] = self.is_enabled(category)
            variables[spec.list_key] = join_features(self.features.get(category, []))
        return variables


def _normalize(value: str) -> List[str]:
    seen = []
    for item in split_features(value):
        if item not in seen:
            seen.append(item)
    return seen
