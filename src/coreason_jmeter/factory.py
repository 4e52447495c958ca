# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_jmeter

from botocore.exceptions import BotoCoreError
from loguru import logger

from coreason_jmeter.config import RunnerConfig
from coreason_jmeter.errors import ScrapeError
from coreason_jmeter.scraper import ArtifactUploader
from coreason_jmeter.storage import CloudUploader, S3Uploader


class UploaderFactory:
    """
    Factory to create ArtifactUploader instances based on configuration.
    """

    @staticmethod
    def get_uploader(config: RunnerConfig) -> ArtifactUploader:
        """
        Returns the cloud uploader in cloud mode, otherwise the S3/MinIO uploader.

        Raises:
            ScrapeError: If the S3 client cannot be created from the configuration.
        """
        if config.cloud_mode:
            logger.info("Uploading artifacts using Cloud uploader")
            return CloudUploader(api_url=config.cloud_api_url, api_key=config.cloud_api_key)

        logger.info("Uploading artifacts using MinIO uploader")
        try:
            return S3Uploader(
                bucket=config.bucket,
                endpoint=config.endpoint,
                access_key=config.access_key_id,
                secret_key=config.secret_access_key,
                region=config.location,
                session_token=config.token,
                ssl=config.ssl,
            )
        except (ValueError, BotoCoreError) as e:
            logger.error(f"Failed to create MinIO uploader: {e}")
            raise ScrapeError(f"could not create uploader: {e}") from e
