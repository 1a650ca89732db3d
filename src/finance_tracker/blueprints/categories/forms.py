"""Category request parsing."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Optional

from ...services.categories import CategoryInput


@dataclass(slots=True)
class CategoryForm:
    """Represents category input prior to validation."""

    name: str = ""
    description: Optional[str] = None
    icon: Optional[str] = None
    color: Optional[str] = None
    errors: dict[str, list[str]] = field(default_factory=dict, init=False)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> CategoryForm:
        form = cls()
        form.load(data)
        return form

    def load(self, data: Mapping[str, Any]) -> None:
        self.errors.clear()
        for key in ("name", "description", "icon", "color"):
            value = data.get(key)
            if value is not None and not isinstance(value, str):
                self._add_error(key, "Must be a string.")
                value = None
            if key == "name":
                value = value or ""
            setattr(self, key, value)

    def validate(self) -> bool:
        """Only type errors are reported here; length rules live in the engine."""

        if not self.name.strip():
            self._add_error("name", "Category name is required.")
        return not self.errors

    def to_input(self) -> CategoryInput:
        return CategoryInput(
            name=self.name,
            description=self.description,
            icon=self.icon,
            color=self.color,
        )

    def _add_error(self, field: str, message: str) -> None:
        self.errors.setdefault(field, []).append(message)
