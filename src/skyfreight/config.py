from typing import Literal

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    data_dir: str = "data"
    storage_backend: Literal["sqlite", "memory", "none"] = "sqlite"
    storage_key: str = "hmavi_data_v1"
    activity_limit: int = 200
    tracking_interval_seconds: float = 4.0
    tracking_prefix: str = "HM"
    host: str = "127.0.0.1"
    port: int = 8000

    model_config = {"env_prefix": "SKYFREIGHT_"}


settings = Settings()
