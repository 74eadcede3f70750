"""In-memory sectioned key/value store for one settings file.

An ``IniFile`` maps section names to ``Section`` handles, and each section
maps keys to string values. Lookups of both sections and keys are
case-insensitive; the spelling used when an entry is first created is the
one that gets written back out.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Iterator

_TRUE_STRINGS = ("true", "1", "yes", "on")


def _to_string(value: Any) -> str:
    if isinstance(value, bool):
        return "True" if value else "False"
    return str(value)


class Section:
    """Handle to one section of an ``IniFile``."""

    def __init__(self, name: str) -> None:
        self.name = name
        self._values: dict[str, tuple[str, str]] = {}

    def __iter__(self) -> Iterator[str]:
        return (key for key, _ in self._values.values())

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"Section({self.name!r}, {dict(self.items())!r})"

    def items(self) -> Iterator[tuple[str, str]]:
        return iter(self._values.values())

    def exists(self, key: str) -> bool:
        return key.lower() in self._values

    def delete(self, key: str) -> bool:
        """Remove *key*; return whether it was present."""
        return self._values.pop(key.lower(), None) is not None

    # -- getters ------------------------------------------------------------

    def get_string(self, key: str, default: str = "") -> str:
        entry = self._values.get(key.lower())
        return default if entry is None else entry[1]

    def get_boolean(self, key: str, default: bool = False) -> bool:
        entry = self._values.get(key.lower())
        if entry is None:
            return default
        return entry[1].strip().lower() in _TRUE_STRINGS

    def get_int(self, key: str, default: int = 0) -> int:
        entry = self._values.get(key.lower())
        if entry is None:
            return default
        try:
            return int(entry[1].strip())
        except ValueError:
            return default

    def get_float(self, key: str, default: float = 0.0) -> float:
        entry = self._values.get(key.lower())
        if entry is None:
            return default
        try:
            return float(entry[1].strip())
        except ValueError:
            return default

    # -- setters ------------------------------------------------------------

    def set_string(self, key: str, value: str) -> None:
        existing = self._values.get(key.lower())
        name = key if existing is None else existing[0]
        self._values[key.lower()] = (name, value)

    def set_boolean(self, key: str, value: bool) -> None:
        self.set_string(key, _to_string(bool(value)))

    def set_int(self, key: str, value: int) -> None:
        self.set_string(key, str(int(value)))

    def set_float(self, key: str, value: float) -> None:
        self.set_string(key, repr(float(value)))


class IniFile:
    """Sections of one named settings file, keyed case-insensitively."""

    def __init__(self) -> None:
        self._sections: dict[str, Section] = {}

    def __iter__(self) -> Iterator[Section]:
        return iter(self._sections.values())

    def __len__(self) -> int:
        return len(self._sections)

    def __repr__(self) -> str:
        return f"IniFile({self.to_dict()!r})"

    def sections(self) -> list[str]:
        return [section.name for section in self._sections.values()]

    def has_section(self, name: str) -> bool:
        return name.lower() in self._sections

    def get_section(self, name: str) -> Section | None:
        return self._sections.get(name.lower())

    def get_or_create_section(self, name: str) -> Section:
        section = self._sections.get(name.lower())
        if section is None:
            section = Section(name)
            self._sections[name.lower()] = section
        return section

    def delete_section(self, name: str) -> bool:
        return self._sections.pop(name.lower(), None) is not None

    def is_empty(self) -> bool:
        return not any(len(section) for section in self._sections.values())

    def to_dict(self) -> dict[str, dict[str, str]]:
        """Return ``{section: {key: value}}``, skipping empty sections."""
        return {
            section.name: dict(section.items())
            for section in self._sections.values()
            if len(section)
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> IniFile:
        """Build from a ``{section: {key: value}}`` mapping.

        Non-table top-level entries are ignored; scalar values are
        converted to their string form.
        """
        ini = cls()
        for section_name, values in data.items():
            if not isinstance(values, dict):
                continue
            section = ini.get_or_create_section(section_name)
            for key, value in values.items():
                if isinstance(value, dict):
                    continue
                section.set_string(key, _to_string(value))
        return ini
