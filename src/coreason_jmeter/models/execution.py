# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_jmeter

"""Data models describing an execution request from the orchestrator."""

from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _WireModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class ContentType(str, Enum):
    """Supported test content types."""

    STRING = "string"
    FILE_URI = "file-uri"
    GIT_FILE = "git-file"
    GIT_DIR = "git-dir"
    GIT = "git"


class Repository(_WireModel):
    """Git repository holding the test plan.

    Attributes:
        uri: Repository URI.
        branch: Branch to check out.
        commit: Commit to check out.
        path: Path of the test plan (file or directory) inside the repository.
        working_dir: Directory inside the repository that JMeter runs in.
        username: Git username.
        token: Git access token.
    """

    uri: str = ""
    branch: str = ""
    commit: str = ""
    path: str = ""
    working_dir: str = ""
    username: str = ""
    token: str = ""


class ContentDescriptor(_WireModel):
    """Reference to the test plan source.

    Attributes:
        type: The content type.
        repository: Git repository details for git content types.
        data: Inline test plan for string content.
        uri: Location of the test plan for file-uri content.
    """

    type: ContentType
    repository: Repository | None = None
    data: str = ""
    uri: str = ""

    @property
    def is_git(self) -> bool:
        return self.type in (ContentType.GIT_FILE, ContentType.GIT_DIR, ContentType.GIT)


class Variable(_WireModel):
    """A named execution variable, passed to JMeter as a ``-J`` property."""

    name: str
    value: str = ""
    type: Literal["basic", "secret"] = "basic"

    @property
    def is_secret(self) -> bool:
        return self.type == "secret"


class Execution(_WireModel):
    """A single test execution request."""

    id: str = ""
    name: str = ""
    test_name: str = ""
    test_suite_name: str = ""
    test_namespace: str = ""
    args: list[str] = Field(default_factory=list)
    variables: dict[str, Variable] = Field(default_factory=dict)
    content: ContentDescriptor | None = None
