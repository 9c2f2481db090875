"""
UserCode Value Object - five-digit primary identity of a user.
"""

import re
from dataclasses import dataclass

from soconnect.domain.exceptions.validation_error import InvalidUserCodeError


@dataclass(frozen=True)
class UserCode:
    value: str  # exactly five ASCII digits, e.g. "04217"

    _PATTERN = re.compile(r"^[0-9]{5}$")

    def __post_init__(self):
        if not isinstance(self.value, str) or not self._PATTERN.match(self.value):
            raise InvalidUserCodeError(f"Invalid user code: {self.value!r}")

    def __str__(self) -> str:
        return self.value
