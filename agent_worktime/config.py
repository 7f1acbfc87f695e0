"""Application configuration loaded from environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    app_name: str = "agent-worktime"
    log_level: str = "INFO"

    # Field names of the upstream status records
    owner_field_name: str = "userId"
    time_field_name: str = "statusTime"
    status_name_field_name: str = "statusName"
    status_id_field_name: str = "statusId"
    device_id_field_name: str = "deviceId"

    # Validation policy
    throws: bool = True
    check_device_id: bool = True

    model_config = {"env_prefix": "WORKTIME_"}


settings = Settings()
