"""Resource-type catalog: Pydantic models, built-in entries and YAML loader."""

from collections.abc import Iterator
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, model_validator

from core.settings import get_setting


class ResourceTier(BaseModel):
    """One pricing tier (sku) of a resource type."""

    sku: str
    name: str
    features: list[str] = Field(default_factory=list)
    limits: dict[str, str] = Field(default_factory=dict)


class ResourceType(BaseModel):
    """Catalog entry for a provisionable resource type."""

    id: str
    name: str
    description: str = ""
    category: str = ""
    features: list[str] = Field(default_factory=list)
    skus: list[ResourceTier] = Field(default_factory=list)
    documentation_url: str = ""
    disabled: bool = False
    has_settings: bool = False
    # Settings UI/schema is production-ready
    settings_ready: bool = False
    # Settings must be captured before creation
    requires_settings: bool = False

    @model_validator(mode="after")
    def _validate_unique_skus(self) -> "ResourceType":
        seen = [t.sku for t in self.skus]
        if len(seen) != len(set(seen)):
            raise ValueError(f"Duplicate sku in resource type {self.id!r}")
        return self

    def get_tier(self, sku: str) -> ResourceTier | None:
        return next((t for t in self.skus if t.sku == sku), None)

    @property
    def offers_settings(self) -> bool:
        return self.has_settings and self.settings_ready


class ResourceCatalog:
    """Read-only, ordered collection of resource types."""

    def __init__(self, resource_types: list[ResourceType]) -> None:
        self._types = list(resource_types)
        self._by_id = {rt.id: rt for rt in self._types}

    def __iter__(self) -> Iterator[ResourceType]:
        return iter(self._types)

    def __len__(self) -> int:
        return len(self._types)

    def get(self, type_id: str | None) -> ResourceType | None:
        if not type_id:
            return None
        return self._by_id.get(type_id)

    def enabled(self) -> list[ResourceType]:
        return [rt for rt in self._types if not rt.disabled]

    def is_sku_valid(self, type_id: str | None, sku: str) -> bool:
        """True when sku belongs to the type. Types without tiers accept any sku, even empty."""
        rt = self.get(type_id)
        if rt is None:
            return False
        if not rt.skus:
            return True
        if not sku:
            return False
        return rt.get_tier(sku) is not None

    def default_sku(self, type_id: str | None) -> str:
        """First tier of the type, or empty string when it has none."""
        rt = self.get(type_id)
        if rt is None or not rt.skus:
            return ""
        return rt.skus[0].sku


_BUILTIN_RESOURCE_TYPES: list[dict[str, Any]] = [
    {
        "id": "Konnektr.Graph",
        "name": "Graph",
        "description": "High-performance graph database and API layer for digital twin data and event processing.",
        "category": "Database",
        "features": ["Graph storage", "Event processing", "Scalable", "API access"],
        "skus": [
            {
                "sku": "standard",
                "name": "Standard",
                "features": ["Events", "M2M Authentication", "Email support"],
                "limits": {"Twins": "1M"},
            },
            {
                "sku": "free",
                "name": "Free",
                "features": ["Development Only", "User Authentication", "Up to 500 twins", "Rate Limits"],
                "limits": {"Twins": "500", "Rate Limit": "1,000 QU/min"},
            },
        ],
        "documentation_url": "https://docs.konnektr.io/graph",
        "has_settings": True,
        "settings_ready": False,
    },
    {
        "id": "Konnektr.Flow",
        "name": "Flow",
        "description": "Real-time data and event processing engine for digital twins and automation.",
        "category": "Workflow",
        "features": ["Workflow orchestration", "Scaling", "Environment variables"],
        "skus": [
            {"sku": "standard", "name": "Standard", "features": ["Up to 50 flows", "Email support"],
             "limits": {"Flows": "50", "Executions": "10,000/mo"}},
            {"sku": "free", "name": "Free", "features": ["Up to 5 flows", "Community support"],
             "limits": {"Flows": "5", "Executions": "1,000/mo"}},
        ],
        "documentation_url": "https://docs.konnektr.io/flow",
        "disabled": True,
        "has_settings": True,
    },
    {
        "id": "Konnektr.Assembler",
        "name": "Assembler",
        "description": "AI-powered digital twin builder for automated model generation.",
        "category": "AI Builder",
        "features": ["AI model generation", "Low-code interface", "DTDL support"],
        "skus": [
            {"sku": "standard", "name": "Standard", "features": ["Up to 20 models", "Email support"],
             "limits": {"Models": "20", "DataSources": "5"}},
            {"sku": "free", "name": "Free", "features": ["Up to 3 models", "Community support"],
             "limits": {"Models": "3", "DataSources": "1"}},
        ],
        "documentation_url": "https://docs.konnektr.io/assembler",
        "disabled": True,
        "has_settings": True,
    },
    {
        "id": "Konnektr.Compass",
        "name": "Compass",
        "description": "Navigation and discovery tool for digital twin analytics and simulation.",
        "category": "Analytics",
        "features": ["Dashboarding", "Simulation", "Cross-twin analytics"],
        "skus": [
            {"sku": "free", "name": "Free", "features": ["Basic analytics", "Community support"],
             "limits": {"Dashboards": "1", "Simulations": "1"}},
            {"sku": "standard", "name": "Standard",
             "features": ["Advanced analytics", "Simulation engine", "Email support"],
             "limits": {"Dashboards": "10", "Simulations": "10"}},
        ],
        "documentation_url": "https://docs.konnektr.io/compass",
        "disabled": True,
        "has_settings": True,
    },
    {
        "id": "Konnektr.Secret",
        "name": "Secret",
        "description": "Securely store sensitive information like passwords, tokens, and keys.",
        "category": "Security",
        "features": ["Secure storage", "RBAC controlled", "Kubernetes Native"],
        "skus": [{"sku": "standard", "name": "Standard", "features": ["Secure Encryption"]}],
        "documentation_url": "https://docs.konnektr.io/secrets",
    },
]


def builtin_catalog() -> ResourceCatalog:
    return ResourceCatalog(
        [ResourceType.model_validate(entry) for entry in _BUILTIN_RESOURCE_TYPES]
    )


def load_catalog(path: Path) -> ResourceCatalog:
    """Read and validate a catalog YAML file. Raises on invalid YAML or validation error."""
    data = yaml.safe_load(path.read_text(encoding="utf-8"))
    if not isinstance(data, dict) or not isinstance(data.get("resource_types"), list):
        raise ValueError(f"Catalog must be a YAML object with a resource_types list: {path}")
    types = [ResourceType.model_validate(entry) for entry in data["resource_types"]]
    ids = [rt.id for rt in types]
    if len(ids) != len(set(ids)):
        raise ValueError(f"Duplicate resource type id in catalog: {path}")
    return ResourceCatalog(types)


def get_catalog(settings: dict[str, Any], project_root: Path | None = None) -> ResourceCatalog:
    """Catalog from catalog.path (relative to project_root) or the built-in one."""
    configured = get_setting(settings, "catalog.path")
    if not configured:
        return builtin_catalog()
    path = Path(configured)
    if not path.is_absolute() and project_root is not None:
        path = project_root / path
    return load_catalog(path)
