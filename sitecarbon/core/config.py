import os
from dataclasses import dataclass, field
from typing import Optional

from sitecarbon.estimation.classifier import TierThresholds
from sitecarbon.estimation.emissions import EmissionsModel
from sitecarbon.estimation.projection import ProjectionConstants

class Settings:
    # Server
    HOST: str = os.getenv("HOST", "0.0.0.0")
    PORT: int = int(os.getenv("PORT", "3000"))
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

    # LLM API Keys
    GOOGLE_API_KEY: Optional[str] = os.getenv("GOOGLE_API_KEY")
    GEMINI_MODEL: str = os.getenv("GEMINI_MODEL", "gemini-2.5-flash")

    # Development
    USE_MOCK: bool = os.getenv("USE_MOCK", "0").lower() in ("1", "true", "yes")

    # Fetching
    REQUEST_TIMEOUT: float = float(os.getenv("REQUEST_TIMEOUT", "10"))
    MAX_REDIRECTS: int = int(os.getenv("MAX_REDIRECTS", "5"))
    USER_AGENT: str = os.getenv(
        "USER_AGENT",
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/110.0.0.0 Safari/537.36",
    )

    # Playwright / browser audit
    PLAYWRIGHT_HEADLESS: bool = os.getenv("PLAYWRIGHT_HEADLESS", "1").lower() in ("1", "true", "yes")
    AUDIT_TIMEOUT_SECONDS: int = int(os.getenv("AUDIT_TIMEOUT_SECONDS", "30"))
    AUDIT_SETTLE_MS: int = int(os.getenv("AUDIT_SETTLE_MS", "1500"))

    # LLM request limits
    LLM_TIMEOUT_SECONDS: int = int(os.getenv("LLM_TIMEOUT_SECONDS", "30"))
    LLM_MAX_OUTPUT_TOKENS: int = int(os.getenv("LLM_MAX_OUTPUT_TOKENS", "400"))

settings = Settings()


@dataclass(frozen=True)
class EstimationConfig:
    """Read-only inputs of the estimation pipeline, built once at startup."""
    model: EmissionsModel = field(default_factory=EmissionsModel)
    projection: ProjectionConstants = field(default_factory=ProjectionConstants)
    thresholds: TierThresholds = field(default_factory=TierThresholds)

DEFAULT_ESTIMATION = EstimationConfig()
