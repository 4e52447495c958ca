# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_jmeter

from typing import Any

from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

from coreason_jmeter.integrations.vault import VaultIntegrator


class VaultSettingsSource(PydanticBaseSettingsSource):
    """
    Custom Pydantic Settings Source that reads secrets from Vault.
    """

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        # Required by the abstract base class; __call__ returns the full dict instead.
        return None, field_name, False  # pragma: no cover

    def __call__(self) -> dict[str, Any]:
        vault = VaultIntegrator()
        secrets: dict[str, Any] = {}

        mapping = {
            "access_key_id": "STORAGE_ACCESS_KEY_ID",
            "secret_access_key": "STORAGE_SECRET_ACCESS_KEY",
            "cloud_api_key": "CLOUD_API_KEY",
            "git_token": "GIT_TOKEN",
        }

        for field, key in mapping.items():
            val = vault.get_secret(key)
            if val:
                secrets[field] = val

        return secrets


class RunnerConfig(BaseSettings):
    """
    Configuration for the JMeter runner.

    Built once by the caller and passed to the runner.
    """

    data_dir: str = "/data"
    jmeter_command: str = "jmeter"
    log_level: str = "INFO"

    # Artifact scraping
    scraper_enabled: bool = False
    cloud_mode: bool = False

    # S3 / MinIO storage
    endpoint: str = "minio:9000"
    access_key_id: str | None = None
    secret_access_key: str | None = None
    location: str | None = None
    token: str | None = None
    bucket: str = "coreason-jmeter-artifacts"
    ssl: bool = False

    # Cloud API
    cloud_api_url: str = "https://api.coreason.ai"
    cloud_api_key: str | None = None

    # Git credentials injected into repository content
    git_username: str | None = None
    git_token: str | None = None

    model_config = SettingsConfigDict(
        env_prefix="COREASON_JMETER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            VaultSettingsSource(settings_cls),
            file_secret_settings,
        )
