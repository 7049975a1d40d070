"""Application configuration using pydantic-settings with grouped env prefixes."""

from __future__ import annotations

from decimal import Decimal

from pydantic import Field
from pydantic_settings import BaseSettings


class LedgerConfig(BaseSettings):
    """External ledger (AppSheet) connection."""

    model_config = {"env_prefix": "PAYROLL_LEDGER_"}

    app_id: str = ""
    access_key: str = ""
    base_url: str = "https://api.appsheet.com/api/v2"
    payroll_table: str = "Payroll"
    leave_bucket_table: str = "Leaves Bucket"
    locale: str = "en-US"
    timezone: str = "Pacific Standard Time"
    run_as_user_email: str | None = None
    timeout: float = 30.0


class EngineConfig(BaseSettings):
    """Payroll engine behaviour."""

    model_config = {"env_prefix": "PAYROLL_ENGINE_"}

    use_existing_week_totals: bool = True
    lookup_chunk_size: int = Field(default=15, ge=1)
    weekly_regular_cap: Decimal = Decimal("40")
    overtime_multiplier: Decimal = Decimal("1.5")
    dry_run: bool = False


class AppSettings(BaseSettings):
    """Root application settings aggregating all sub-configs."""

    model_config = {"env_prefix": "PAYROLL_"}

    log_level: str = "INFO"
    log_json: bool = True
    allowed_origins: str = ""

    ledger: LedgerConfig = Field(default_factory=LedgerConfig)
    engine: EngineConfig = Field(default_factory=EngineConfig)
