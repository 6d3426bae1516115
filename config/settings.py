"""Central configuration using Pydantic BaseSettings."""

from datetime import time
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Simulator settings loaded from environment variables and .env file."""

    # Application
    app_name: str = "Smart Home Simulator"
    debug: bool = False
    log_level: str = "INFO"

    # Simulation loop
    simulation_step_minutes: int = Field(default=1, ge=1)
    simulation_pace_seconds: float = Field(default=0.0, ge=0.0)  # 0 = run flat out
    default_duration_minutes: int = Field(default=180, ge=1)
    simulation_start: time = time(6, 0)

    # Environment
    weather_seed: int | None = None

    # Scenarios config
    scenarios_config_path: str = str(
        Path(__file__).parent / "scenarios.yaml"
    )

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "env_prefix": "HOMESIM_",
        "extra": "ignore",
    }


settings = Settings()
