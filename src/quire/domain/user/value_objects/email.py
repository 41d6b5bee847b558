"""Member email address.

Emails are the login identifier, so two spellings that differ only in case
or surrounding whitespace must compare equal. The stored form is always the
normalized one.
"""

import re
from dataclasses import dataclass

from quire.domain.user.exceptions import InvalidEmailError

MAX_EMAIL_LENGTH = 254

_SYNTAX = re.compile(r"^[a-z0-9._%+-]+@(?:[a-z0-9-]+\.)+[a-z]{2,}$")


@dataclass(frozen=True)
class Email:
    value: str

    def __post_init__(self) -> None:
        normalized = (self.value or "").strip().lower()
        if not normalized:
            msg = "Email cannot be empty"
            raise InvalidEmailError(msg)
        if len(normalized) > MAX_EMAIL_LENGTH or not _SYNTAX.match(normalized):
            msg = f"Invalid email format: {self.value}"
            raise InvalidEmailError(msg)
        object.__setattr__(self, "value", normalized)

    @property
    def domain(self) -> str:
        return self.value.rsplit("@", 1)[1]

    def __str__(self) -> str:
        return self.value
