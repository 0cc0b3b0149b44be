"""Configuration models."""

from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, Field, model_validator


class Frequency(str, Enum):
    """Report cadence bucket."""

    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"


class SourceType(str, Enum):
    """Kind of configured source."""

    NEWSPAPERS = "newspapers"
    STOCK = "stock"
    JAMSTOCKEX = "jamstockex"


class Stage(str, Enum):
    """Phase of LLM usage."""

    INGEST = "ingest"
    SUMMARIZE = "summarize"


class LLMConfig(BaseModel):
    """LLM provider configuration."""

    provider: str = Field("openai", description="LLM provider (openai, mock)")
    model: str = Field("gpt-4o-mini", description="Model name")
    api_key_env: Optional[str] = Field("OPENAI_API_KEY", description="Environment variable for API key")
    api_key: Optional[str] = Field(None, description="API key (prefer api_key_env)")
    base_url: Optional[str] = Field(None, description="Base URL for API")
    max_retries: int = Field(3, description="Attempts on rate limiting or unavailability", ge=1, le=10)
    retry_wait_minutes: float = Field(10.0, description="Fixed wait between attempts", ge=0.0)


class ProxyConfig(BaseModel):
    """Rotating proxy service configuration."""

    api_url: str = Field(
        "https://proxy.webshare.io/api/v2/proxy/list/",
        description="Proxy list endpoint",
    )
    api_token_env: str = Field("PROXY_API_TOKEN", description="Environment variable for API token")
    timeout: float = Field(30.0, description="Request timeout in seconds", gt=0)


class BrowserConfig(BaseModel):
    """Headless browser configuration."""

    headless: bool = Field(True, description="Run Chrome without a window")
    page_load_timeout: float = Field(1200.0, description="Navigation timeout in seconds", gt=0)
    window_width: int = Field(1920, ge=320)
    window_height: int = Field(1080, ge=240)
    user_agent: str = Field(
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/122.0.0.0 Safari/537.36",
        description="User agent sent by the browser",
    )
    accept_language: str = Field("en-US,en;q=0.9", description="Accept-Language header")


class PipelineConfig(BaseModel):
    """Pipeline tuning."""

    frequency: Frequency = Field(Frequency.DAILY, description="Catalog cadence used for runs")
    high_priority_threshold: int = Field(3, description="Priorities at or below this are high priority")
    stock_fetch_delay_seconds: float = Field(
        60.0, description="Throttle between successive stock page fetches", ge=0.0
    )
    http_timeout: float = Field(60.0, description="Timeout for proxied page fetches", gt=0)


class EmailConfig(BaseModel):
    """SMTP delivery configuration."""

    smtp_host: str = Field("smtp.gmail.com", description="SMTP server")
    smtp_port: int = Field(587, description="SMTP port (STARTTLS)")
    username: Optional[str] = Field(None, description="SMTP login")
    password_env: str = Field("SMTP_PASSWORD", description="Environment variable for SMTP password")
    sender: Optional[str] = Field(None, description="From address, defaults to username")
    recipients: List[str] = Field(default_factory=list, description="To addresses")
    max_retries: int = Field(3, ge=1, le=10)
    news_subject: str = Field("Daily Report", description="Subject of the news report")
    market_subject: str = Field("Daily Jamstockex Report", description="Subject of the market report")


class ConfigModel(BaseModel):
    """Main configuration model."""

    workspace_root: str = Field("~/MarketBrief", description="Root directory for scratch files")
    catalog_path: Optional[str] = Field(
        None, description="Source and prompt catalog, defaults to catalog.yaml beside the config"
    )
    log_level: str = Field("INFO", description="Logging level")
    llm: LLMConfig = Field(default_factory=LLMConfig)
    proxy: ProxyConfig = Field(default_factory=ProxyConfig)
    browser: BrowserConfig = Field(default_factory=BrowserConfig)
    pipeline: PipelineConfig = Field(default_factory=PipelineConfig)
    email: EmailConfig = Field(default_factory=EmailConfig)


class PromptSet(BaseModel):
    """Instructions for each LLM stage of one source type."""

    ingest: Optional[str] = None
    summarize: Optional[str] = None


class CatalogModel(BaseModel):
    """Source URLs and prompt instructions keyed by frequency and source type."""

    sources: Dict[Frequency, Dict[SourceType, List[str]]] = Field(default_factory=dict)
    prompts: Dict[Frequency, Dict[SourceType, PromptSet]] = Field(default_factory=dict)

    @model_validator(mode="after")
    def check_required_prompts(self) -> "CatalogModel":
        """Daily ingest prompts are required for every source type."""
        daily = self.prompts.get(Frequency.DAILY)
        if not daily:
            raise ValueError("missing prompts.daily")
        missing = [
            source_type.value
            for source_type in SourceType
            if source_type not in daily or not daily[source_type].ingest
        ]
        if missing:
            raise ValueError(f"missing ingest prompt for: {', '.join(missing)}")
        return self
