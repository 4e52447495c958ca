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
from collections.abc import Mapping

from coreason_jmeter.models import Variable

SECRET_MASK = b"********"


class EnvManager:
    """Holds execution variables for a run.

    Variables become JMeter ``-J`` properties and process environment entries.
    Secret variable values are masked in captured output.
    """

    def __init__(self, variables: Mapping[str, Variable] | None = None):
        self.variables: dict[str, Variable] = dict(variables or {})

    def jmeter_properties(self) -> list[str]:
        """Returns one ``-J<name>=<value>`` token per variable, in declaration order."""
        return [f"-J{variable.name}={variable.value}" for variable in self.variables.values()]

    def environ(self) -> dict[str, str]:
        """Returns the process environment with the variables applied."""
        env = dict(os.environ)
        env.update({variable.name: variable.value for variable in self.variables.values()})
        return env

    def obfuscate_secrets(self, output: bytes) -> bytes:
        """Masks every secret variable value found in the output."""
        # Longest first, so a secret containing another secret is masked whole.
        secrets = sorted(
            (v.value.encode("utf-8") for v in self.variables.values() if v.is_secret and v.value),
            key=len,
            reverse=True,
        )
        for secret in secrets:
            output = output.replace(secret, SECRET_MASK)
        return output

    def mask(self, text: str) -> str:
        """Masks every secret variable value found in the text."""
        return self.obfuscate_secrets(text.encode("utf-8")).decode("utf-8")
