"""User request parsing."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Optional

from ...services.users import UserInput

_FIELDS = ("email", "first_name", "last_name", "phone", "avatar_url")


@dataclass(slots=True)
class UserForm:
    """Represents profile input prior to validation."""

    email: str = ""
    first_name: str = ""
    last_name: str = ""
    phone: Optional[str] = None
    avatar_url: Optional[str] = None
    errors: dict[str, list[str]] = field(default_factory=dict, init=False)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> UserForm:
        form = cls()
        form.load(data)
        return form

    def load(self, data: Mapping[str, Any]) -> None:
        self.errors.clear()
        for key in _FIELDS:
            value = data.get(key)
            if value is not None and not isinstance(value, str):
                self.errors.setdefault(key, []).append("Must be a string.")
                value = None
            if key in {"phone", "avatar_url"}:
                setattr(self, key, value)
            else:
                setattr(self, key, value or "")

    def validate(self) -> bool:
        return not self.errors

    def to_input(self) -> UserInput:
        return UserInput(
            email=self.email,
            first_name=self.first_name,
            last_name=self.last_name,
            phone=self.phone,
            avatar_url=self.avatar_url,
        )
