"""Pydantic v2 configuration schema with strict validation."""

from pydantic import BaseModel, Field

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/124.0.0.0 Safari/537.36"
)


class HttpConfig(BaseModel):
    model_config = {"extra": "forbid"}

    timeout_seconds: float = Field(default=10.0, gt=0.0)
    user_agent: str = DEFAULT_USER_AGENT


class BrowserConfig(BaseModel):
    model_config = {"extra": "forbid"}

    navigation_timeout_seconds: float = Field(default=30.0, gt=0.0)
    table_wait_seconds: float = Field(default=5.0, ge=0.0)
    settle_seconds: float = Field(default=3.0, ge=0.0)
    consent_settle_seconds: float = Field(default=2.0, ge=0.0)
    viewport_width: int = Field(default=1366, ge=320)
    viewport_height: int = Field(default=768, ge=240)
    headless: bool = True
    user_agent: str = DEFAULT_USER_AGENT
    launch_args: list[str] = [
        "--no-sandbox",
        "--disable-setuid-sandbox",
        "--disable-blink-features=AutomationControlled",
    ]


class TableConfig(BaseModel):
    model_config = {"extra": "forbid"}

    # The largest-table fallback accepts only tables with more rows than this
    min_rows: int = Field(default=5, ge=0)


class CacheConfig(BaseModel):
    model_config = {"extra": "forbid"}

    ttl_minutes: float = Field(default=5.0, ge=0.0)


class BatchConfig(BaseModel):
    model_config = {"extra": "forbid"}

    max_workers: int = Field(default=8, ge=1)


class ScraperConfig(BaseModel):
    model_config = {"extra": "forbid"}

    http: HttpConfig = HttpConfig()
    browser: BrowserConfig = BrowserConfig()
    table: TableConfig = TableConfig()
    cache: CacheConfig = CacheConfig()
    batch: BatchConfig = BatchConfig()
