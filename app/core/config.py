import os
import logging
from pydantic import BaseModel, Field
from typing import List
from dotenv import load_dotenv

load_dotenv()


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() == "true"


class PolicySettings(BaseModel):
    probation_months: int = Field(default=int(os.getenv("PROBATION_MONTHS", "6")))
    maternity_min_notice_days: int = Field(default=int(os.getenv("MATERNITY_MIN_NOTICE_DAYS", "60")))
    # Reject approver actions that skip an earlier pending step
    strict_approval_order: bool = Field(default=_env_flag("STRICT_APPROVAL_ORDER", "true"))


class Config(BaseModel):
    app_name: str = "University HRM"
    environment: str = os.getenv("APP_ENV", "development")
    api_prefix: str = "/api"

    # State snapshots
    database_url: str = os.getenv("DATABASE_URL", "sqlite:///./hrm_state.db")
    persist_state: bool = _env_flag("PERSIST_STATE", "true")
    seed_demo_data: bool = _env_flag("SEED_DEMO_DATA", "true")

    # Approval policy
    policy: PolicySettings = PolicySettings()

    version: str = "1.0.0"
    request_id_header: str = "X-Request-ID"

    # CORS: comma-separated origins loaded from env
    cors_origins: List[str] = Field(
        default_factory=lambda: [
            o.strip()
            for o in os.getenv(
                "CORS_ORIGINS",
                "http://localhost:5173,http://127.0.0.1:5173,"
                "http://localhost:3000,http://127.0.0.1:3000",
            ).split(",")
            if o.strip()
        ]
    )

    rate_limit_enabled: bool = _env_flag("RATE_LIMIT_ENABLED", "true")
    rate_limit_per_minute: int = int(os.getenv("RATE_LIMIT_PER_MINUTE", "120"))


settings = Config()

_logger = logging.getLogger(__name__)
if settings.environment != "development" and settings.database_url.startswith("sqlite:///./"):
    _logger.warning("⚠ Using a local SQLite snapshot file outside development.")
