"""Configuration loader."""

import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import ValidationError

from .models import CatalogModel, ConfigModel

DEFAULT_CONFIG_DIR = Path.home() / ".config" / "marketbrief"
PAGE_CONTENT_DIR = "page-content"
SCRAPED_ARTICLES_DIR = "scraped-articles"


class Config:
    """Configuration manager."""

    def __init__(self, config_path: Optional[Path] = None) -> None:
        """Initialize config manager."""
        if config_path is None:
            config_path = DEFAULT_CONFIG_DIR / "config.yaml"
        self.config_path = config_path
        self._config: Optional[ConfigModel] = None
        self._catalog: Optional[CatalogModel] = None

    @property
    def config(self) -> ConfigModel:
        """Get loaded config."""
        if self._config is None:
            self._config = load_config(self.config_path)
        return self._config

    @property
    def catalog_path(self) -> Path:
        """Get the source and prompt catalog path."""
        if self.config.catalog_path:
            return Path(self.config.catalog_path).expanduser()
        return self.config_path.parent / "catalog.yaml"

    @property
    def catalog(self) -> CatalogModel:
        """Get loaded catalog."""
        if self._catalog is None:
            self._catalog = load_catalog(self.catalog_path)
        return self._catalog

    @property
    def workspace_root(self) -> Path:
        """Get workspace root path."""
        path = Path(self.config.workspace_root).expanduser()
        path.mkdir(parents=True, exist_ok=True)
        return path

    @property
    def page_content_dir(self) -> Path:
        return self.workspace_root / PAGE_CONTENT_DIR

    @property
    def scraped_articles_dir(self) -> Path:
        return self.workspace_root / SCRAPED_ARTICLES_DIR

    def get_llm_config(self) -> Dict[str, Any]:
        """Get LLM configuration dict."""
        llm_config = self.config.llm.model_dump()

        # Handle API key from environment if specified
        if llm_config.get("api_key_env") and not llm_config.get("api_key"):
            api_key = os.environ.get(llm_config["api_key_env"])
            if api_key:
                llm_config["api_key"] = api_key

        return llm_config

    def get_proxy_token(self) -> Optional[str]:
        """Get the proxy service API token from the environment."""
        return os.environ.get(self.config.proxy.api_token_env)

    def get_email_password(self) -> Optional[str]:
        """Get the SMTP password from the environment."""
        return os.environ.get(self.config.email.password_env)


def _read_yaml(path: Path, kind: str) -> Dict[str, Any]:
    if not path.exists():
        raise FileNotFoundError(f"{kind} file not found: {path}")

    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in {kind.lower()} file: {e}")

    return data or {}


def load_config(config_path: Path) -> ConfigModel:
    """Load configuration from YAML file."""
    config_data = _read_yaml(config_path, "Config")
    try:
        return ConfigModel(**config_data)
    except ValidationError as e:
        raise ValueError(f"Invalid configuration: {e}")


def load_catalog(catalog_path: Path) -> CatalogModel:
    """Load and validate the source and prompt catalog."""
    catalog_data = _read_yaml(catalog_path, "Catalog")
    try:
        return CatalogModel(**catalog_data)
    except ValidationError as e:
        raise ValueError(f"Invalid prompt catalog: {e}")


def save_config(config: ConfigModel, config_path: Path) -> None:
    """Save configuration to YAML file."""
    config_path.parent.mkdir(parents=True, exist_ok=True)

    with open(config_path, "w") as f:
        yaml.dump(config.model_dump(mode="json"), f, default_flow_style=False, sort_keys=False)


def save_catalog(catalog: CatalogModel, catalog_path: Path) -> None:
    """Save the catalog to YAML file."""
    catalog_path.parent.mkdir(parents=True, exist_ok=True)

    with open(catalog_path, "w") as f:
        yaml.dump(
            catalog.model_dump(mode="json", exclude_none=True),
            f,
            default_flow_style=False,
            sort_keys=False,
            width=100,
        )
