# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_jmeter

import mimetypes
from collections.abc import Sequence
from typing import Any

import aiofiles  # type: ignore[import-untyped]
import anyio
import boto3
import httpx
from botocore.exceptions import ClientError
from loguru import logger

from coreason_jmeter.scraper import ArtifactFile


class S3Uploader:
    """S3/MinIO implementation of the ArtifactUploader protocol."""

    def __init__(
        self,
        bucket: str,
        endpoint: str | None = None,
        access_key: str | None = None,
        secret_key: str | None = None,
        region: str | None = None,
        session_token: str | None = None,
        ssl: bool = False,
    ):
        """Initializes the S3Uploader backend.

        Args:
            bucket: The bucket name.
            endpoint: Optional host[:port] or URL of an S3-compatible service (e.g., MinIO).
            access_key: Optional access key ID.
            secret_key: Optional secret access key.
            region: Optional region name.
            session_token: Optional session token.
            ssl: Whether to connect over TLS when the endpoint has no scheme.
        """
        self.bucket = bucket
        endpoint_url = None
        if endpoint:
            endpoint_url = endpoint if "://" in endpoint else f"{'https' if ssl else 'http'}://{endpoint}"

        self.client = boto3.client(
            "s3",
            region_name=region,
            aws_access_key_id=access_key,
            aws_secret_access_key=secret_key,
            aws_session_token=session_token,
            endpoint_url=endpoint_url,
        )

    async def upload(self, meta: dict[str, Any], files: Sequence[ArtifactFile]) -> None:
        """Uploads files under ``<bucket_folder>/<name>``.

        Raises:
            FileNotFoundError: If a local file does not exist.
            ClientError: If the upload to S3 fails.
        """
        folder = meta.get("bucket_folder", "")

        def _upload_all() -> None:
            for artifact in files:
                if not artifact.path.exists():
                    raise FileNotFoundError(f"File not found: {artifact.path}")
                key = f"{folder}/{artifact.name}" if folder else artifact.name
                logger.info(f"Uploading {artifact.path} to s3://{self.bucket}/{key}")
                self.client.upload_file(str(artifact.path), self.bucket, key)

        try:
            await anyio.to_thread.run_sync(_upload_all)
        except ClientError as e:
            logger.error(f"Failed to upload file to S3: {e}")
            raise


class CloudUploader:
    """Uploads artifacts to the cloud API over HTTP."""

    def __init__(self, api_url: str, api_key: str | None = None, client: httpx.AsyncClient | None = None):
        """Initializes the CloudUploader.

        Args:
            api_url: Base URL of the cloud API.
            api_key: API key sent as a bearer token.
            client: Optional httpx.AsyncClient for connection pooling.
        """
        self.api_url = api_url.rstrip("/")
        self.api_key = api_key
        self._client = client

    async def upload(self, meta: dict[str, Any], files: Sequence[ArtifactFile]) -> None:
        """Uploads each file with ``PUT {api_url}/executions/{id}/artifacts/{name}``.

        Raises:
            httpx.HTTPError: If a request fails or returns an error status.
        """
        if self._client is not None:
            await self._upload_all(self._client, meta, files)
            return

        async with httpx.AsyncClient(timeout=60.0) as client:
            await self._upload_all(client, meta, files)

    async def _upload_all(self, client: httpx.AsyncClient, meta: dict[str, Any], files: Sequence[ArtifactFile]) -> None:
        execution_id = meta.get("execution_id", "")
        params = {k: v for k, v in meta.items() if k != "execution_id" and v}
        headers = {"Authorization": f"Bearer {self.api_key}"} if self.api_key else {}

        for artifact in files:
            async with aiofiles.open(artifact.path, "rb") as f:
                content = await f.read()

            content_type, _ = mimetypes.guess_type(artifact.name)
            url = f"{self.api_url}/executions/{execution_id}/artifacts/{artifact.name}"
            logger.info(f"Uploading {artifact.path} to {url}")
            response = await client.put(
                url,
                content=content,
                params=params,
                headers={**headers, "Content-Type": content_type or "application/octet-stream"},
            )
            response.raise_for_status()
