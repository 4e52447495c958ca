# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_jmeter

from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Protocol

from loguru import logger

from coreason_jmeter.errors import ScrapeError
from coreason_jmeter.models import Execution


@dataclass(frozen=True)
class ArtifactFile:
    """A file to upload, with its object name relative to the scraped directory."""

    name: str
    path: Path


class ArtifactUploader(Protocol):
    """Protocol for artifact storage backends (S3/MinIO or the cloud API)."""

    async def upload(self, meta: dict[str, Any], files: Sequence[ArtifactFile]) -> None:
        """Uploads files as execution artifacts.

        Args:
            meta: Execution identifying metadata.
            files: The files to upload.
        """
        ...


def extract_minio_meta(execution: Execution) -> dict[str, Any]:
    """Metadata for object storage uploads: artifacts are stored under the execution ID."""
    return {"bucket_folder": execution.id}


def extract_cloud_meta(execution: Execution) -> dict[str, Any]:
    """Metadata for cloud API uploads."""
    return {
        "execution_id": execution.id,
        "execution_name": execution.name,
        "test_name": execution.test_name,
        "test_suite_name": execution.test_suite_name,
    }


class FilesystemExtractor:
    """Collects regular files from a set of directories."""

    def __init__(self, directories: Sequence[Path]):
        self.directories = list(directories)

    def extract(self) -> Iterator[ArtifactFile]:
        for directory in self.directories:
            if not directory.is_dir():
                logger.warning(f"Skipping missing artifact directory {directory}")
                continue
            files = [
                ArtifactFile(name=path.relative_to(directory).as_posix(), path=path)
                for path in directory.rglob("*")
                if path.is_file()
            ]
            yield from sorted(files, key=lambda f: f.name)


class Scraper:
    """Extracts files from directories and hands them to an uploader."""

    def __init__(self, extractor: FilesystemExtractor, uploader: ArtifactUploader):
        self.extractor = extractor
        self.uploader = uploader

    async def scrape(self, meta: dict[str, Any]) -> None:
        """Uploads every extracted file.

        Raises:
            ScrapeError: If extraction or upload fails.
        """
        try:
            files = list(self.extractor.extract())
            logger.info(f"Uploading {len(files)} artifacts using {type(self.uploader).__name__}")
            await self.uploader.upload(meta, files)
        except Exception as e:
            logger.error(f"Error encountered while scraping artifacts: {e}")
            raise ScrapeError(str(e)) from e
