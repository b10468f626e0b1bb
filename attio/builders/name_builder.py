from collections.abc import Mapping
from typing import Any

NAME_PREFIXES = ("Dr", "Mr", "Mrs", "Ms", "Miss", "Prof")
NAME_SUFFIXES = ("Jr", "Sr", "III", "II", "PhD", "MD")


class NameBuilder:
    """Fluent builder for the personal-name value Attio expects.

    Example:
        NameBuilder().first("John").last("Doe").build()
        # [{"first_name": "John", "last_name": "Doe", "full_name": "John Doe"}]
    """

    def __init__(self) -> None:
        self._name_data: dict[str, str] = {}

    def first(self, name: str) -> "NameBuilder":
        self._name_data["first_name"] = name
        return self

    def middle(self, name: str) -> "NameBuilder":
        self._name_data["middle_name"] = name
        return self

    def last(self, name: str) -> "NameBuilder":
        self._name_data["last_name"] = name
        return self

    def prefix(self, prefix: str) -> "NameBuilder":
        self._name_data["prefix"] = prefix
        return self

    def suffix(self, suffix: str) -> "NameBuilder":
        self._name_data["suffix"] = suffix
        return self

    def full(self, name: str) -> "NameBuilder":
        """Set the full name explicitly instead of joining the parts."""
        self._name_data["full_name"] = name
        return self

    def build(self) -> list[dict[str, str]]:
        name_data = dict(self._name_data)
        if "full_name" not in name_data:
            parts = [
                name_data[key]
                for key in ("prefix", "first_name", "middle_name", "last_name", "suffix")
                if name_data.get(key)
            ]
            if parts:
                name_data["full_name"] = " ".join(parts)
        return [name_data]

    def parse(self, full_name: str | None) -> "NameBuilder":
        """Split a full name into parts.

        Recognizes a leading prefix (Dr, Mr, ...) and a trailing suffix (Jr,
        PhD, ...); anything between first and last becomes the middle name.
        """
        if not full_name:
            return self

        parts = full_name.split()
        if parts and parts[0] in NAME_PREFIXES and len(parts) > 2:
            self._name_data["prefix"] = parts.pop(0)
        if len(parts) > 2 and parts[-1] in NAME_SUFFIXES:
            self._name_data["suffix"] = parts.pop()

        if parts:
            self._name_data["first_name"] = parts[0]
        if len(parts) >= 2:
            self._name_data["last_name"] = parts[-1]
        if len(parts) > 2:
            self._name_data["middle_name"] = " ".join(parts[1:-1])

        self._name_data["full_name"] = full_name.strip()
        return self

    @classmethod
    def from_input(cls, value: Any) -> list[dict[str, Any]]:
        """Build the name value from a string, mapping, builder or an already-built list."""
        if isinstance(value, str):
            return cls().parse(value).build()
        if isinstance(value, NameBuilder):
            return value.build()
        if isinstance(value, list):
            return value
        if isinstance(value, Mapping):
            builder = cls()
            for method, keys in (
                (builder.first, ("first", "first_name")),
                (builder.middle, ("middle", "middle_name")),
                (builder.last, ("last", "last_name")),
                (builder.prefix, ("prefix",)),
                (builder.suffix, ("suffix",)),
                (builder.full, ("full", "full_name")),
            ):
                part = next((value[key] for key in keys if value.get(key)), None)
                if part:
                    method(part)
            return builder.build()
        raise TypeError(f"Invalid input type for NameBuilder: {type(value).__name__}")
