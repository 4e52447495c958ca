# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_jmeter

import os
from typing import Protocol, runtime_checkable

from loguru import logger

ENV_PREFIX = "COREASON_JMETER_"


@runtime_checkable
class VaultClientProtocol(Protocol):
    """
    Protocol for Vault Client to allow dependency injection and testing.
    """

    def get_secret(self, key: str) -> str | None:
        """
        Retrieve a secret by key.
        """
        ...


class VaultIntegrator:
    """
    Fetches runner secrets from an injected vault client, or from environment
    variables when no client is given.
    """

    def __init__(self, client: VaultClientProtocol | None = None):
        self.client = client

    def get_secret(self, key: str) -> str | None:
        """
        Fetch a secret. Returns None if it is missing or the fetch fails.
        """
        if self.client:
            try:
                return self.client.get_secret(key)
            except Exception as e:
                logger.warning(f"Failed to fetch secret {key} from Vault: {e}")
                return None

        val = os.getenv(key) or os.getenv(f"{ENV_PREFIX}{key}")
        if not val:
            logger.debug(f"Secret {key} not found in environment.")
        return val
