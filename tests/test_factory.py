from unittest.mock import patch

import pytest
from botocore.exceptions import NoRegionError
from coreason_jmeter.config import RunnerConfig
from coreason_jmeter.errors import ScrapeError
from coreason_jmeter.factory import UploaderFactory
from coreason_jmeter.storage import CloudUploader, S3Uploader


def test_factory_returns_s3_uploader(config: RunnerConfig) -> None:
    config.endpoint = "minio:9000"
    config.bucket = "artifacts"
    config.access_key_id = "key"
    config.secret_access_key = "secret"
    config.location = "us-east-1"
    config.ssl = True

    with patch("coreason_jmeter.factory.S3Uploader") as MockS3:
        uploader = UploaderFactory.get_uploader(config)

    MockS3.assert_called_with(
        bucket="artifacts",
        endpoint="minio:9000",
        access_key="key",
        secret_key="secret",
        region="us-east-1",
        session_token=None,
        ssl=True,
    )
    assert uploader == MockS3.return_value


def test_factory_returns_real_s3_uploader(config: RunnerConfig) -> None:
    with patch("coreason_jmeter.storage.boto3"):
        assert isinstance(UploaderFactory.get_uploader(config), S3Uploader)


def test_factory_returns_cloud_uploader(config: RunnerConfig) -> None:
    config.cloud_mode = True
    config.cloud_api_url = "https://api.example.com/"
    config.cloud_api_key = "api-key"

    uploader = UploaderFactory.get_uploader(config)

    assert isinstance(uploader, CloudUploader)
    assert uploader.api_url == "https://api.example.com"
    assert uploader.api_key == "api-key"


def test_factory_invalid_endpoint_raises_scrape_error(config: RunnerConfig) -> None:
    config.endpoint = "http://bad host:9000"

    with pytest.raises(ScrapeError, match="could not create uploader"):
        UploaderFactory.get_uploader(config)


def test_factory_wraps_botocore_errors(config: RunnerConfig) -> None:
    with patch("coreason_jmeter.factory.S3Uploader", side_effect=NoRegionError()):
        with pytest.raises(ScrapeError):
            UploaderFactory.get_uploader(config)
