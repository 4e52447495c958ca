from pathlib import Path
from typing import Any
from unittest.mock import patch

import httpx
import pytest
from botocore.exceptions import ClientError
from coreason_jmeter.scraper import ArtifactFile
from coreason_jmeter.storage import CloudUploader, S3Uploader


@pytest.fixture
def mock_boto3() -> Any:
    with patch("coreason_jmeter.storage.boto3") as mock:
        yield mock


@pytest.fixture
def report_file(tmp_path: Path) -> ArtifactFile:
    path = tmp_path / "report.jtl"
    path.write_text("<testResults/>")
    return ArtifactFile(name="report.jtl", path=path)


def test_s3_uploader_init(mock_boto3: Any) -> None:
    uploader = S3Uploader(bucket="my-bucket", endpoint="minio:9000", region="us-east-1")
    mock_boto3.client.assert_called_with(
        "s3",
        region_name="us-east-1",
        aws_access_key_id=None,
        aws_secret_access_key=None,
        aws_session_token=None,
        endpoint_url="http://minio:9000",
    )
    assert uploader.bucket == "my-bucket"


def test_s3_uploader_endpoint_scheme(mock_boto3: Any) -> None:
    S3Uploader(bucket="b", endpoint="minio:9000", ssl=True)
    assert mock_boto3.client.call_args.kwargs["endpoint_url"] == "https://minio:9000"

    S3Uploader(bucket="b", endpoint="http://localhost:9000", ssl=True)
    assert mock_boto3.client.call_args.kwargs["endpoint_url"] == "http://localhost:9000"


@pytest.mark.asyncio
async def test_s3_upload_success(mock_boto3: Any, report_file: ArtifactFile) -> None:
    uploader = S3Uploader(bucket="my-bucket")
    mock_client = mock_boto3.client.return_value

    await uploader.upload({"bucket_folder": "exec-1"}, [report_file])

    mock_client.upload_file.assert_called_with(str(report_file.path), "my-bucket", "exec-1/report.jtl")


@pytest.mark.asyncio
async def test_s3_upload_file_not_found(mock_boto3: Any, tmp_path: Path) -> None:
    uploader = S3Uploader(bucket="my-bucket")
    with pytest.raises(FileNotFoundError):
        await uploader.upload({}, [ArtifactFile(name="x", path=tmp_path / "nonexistent")])


@pytest.mark.asyncio
async def test_s3_upload_client_error(mock_boto3: Any, report_file: ArtifactFile) -> None:
    uploader = S3Uploader(bucket="my-bucket")
    mock_client = mock_boto3.client.return_value
    mock_client.upload_file.side_effect = ClientError({"Error": {"Code": "403", "Message": "Forbidden"}}, "PutObject")

    with pytest.raises(ClientError):
        await uploader.upload({"bucket_folder": "exec-1"}, [report_file])


@pytest.mark.asyncio
async def test_cloud_upload_puts_each_file(report_file: ArtifactFile) -> None:
    requests: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(200)

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        uploader = CloudUploader(api_url="https://api.example.com/", api_key="key-1", client=client)
        await uploader.upload({"execution_id": "exec-1", "test_name": "smoke", "test_suite_name": ""}, [report_file])

    assert len(requests) == 1
    request = requests[0]
    assert request.method == "PUT"
    assert request.url.path == "/executions/exec-1/artifacts/report.jtl"
    assert request.url.params["test_name"] == "smoke"
    assert "test_suite_name" not in request.url.params
    assert request.headers["Authorization"] == "Bearer key-1"
    assert request.content == b"<testResults/>"


@pytest.mark.asyncio
async def test_cloud_upload_error_status(report_file: ArtifactFile) -> None:
    transport = httpx.MockTransport(lambda request: httpx.Response(500))

    async with httpx.AsyncClient(transport=transport) as client:
        uploader = CloudUploader(api_url="https://api.example.com", client=client)
        with pytest.raises(httpx.HTTPStatusError):
            await uploader.upload({"execution_id": "exec-1"}, [report_file])
