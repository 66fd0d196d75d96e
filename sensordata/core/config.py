from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="SENSORDATA_", env_file=".env", extra="ignore")

    app_name: str = "sensordata"

    # Logging
    log_level: str = "INFO"
    log_file: str = ""  # empty => console only
    log_max_bytes: int = 2_000_000
    log_backup_count: int = 5

    # set_value() reports "no clamping" while |v - clamped| < epsilon * factor
    clamp_epsilon_factor: float = Field(default=100.0, gt=0)

    # Optional JSON file with extra sensor kinds
    kinds_path: Optional[str] = None


settings = Settings()
