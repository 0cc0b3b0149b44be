"""Configuration management for the digest."""

from .catalog import SourceCatalog, populate_date_url
from .loader import (
    Config,
    load_catalog,
    load_config,
    save_catalog,
    save_config,
)
from .models import (
    CatalogModel,
    ConfigModel,
    Frequency,
    PromptSet,
    SourceType,
    Stage,
)

__all__ = [
    "CatalogModel",
    "Config",
    "ConfigModel",
    "Frequency",
    "PromptSet",
    "SourceCatalog",
    "SourceType",
    "Stage",
    "load_catalog",
    "load_config",
    "populate_date_url",
    "save_catalog",
    "save_config",
]
