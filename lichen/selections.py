"""Package selection groups loaded from JSON documents."""

from __future__ import annotations

import json
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field


class SelectionError(Exception):
    """Raised when selection data cannot be decoded or resolved."""


class UnknownGroupError(SelectionError):
    """Raised when a selection group name is not known."""

    def __init__(self, name: str) -> None:
        super().__init__("unknown group")
        self.name = name


def _string_list(data: dict, key: str) -> list[str]:
    value = data[key]
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise SelectionError(f"serde: field `{key}` must be a list of strings")
    return list(value)


def _string(data: dict, key: str) -> str:
    value = data[key]
    if not isinstance(value, str):
        raise SelectionError(f"serde: field `{key}` must be a string")
    return value


@dataclass
class Group:
    """A named set of packages, optionally building on other groups."""

    name: str
    summary: str
    description: str
    required: list[str]
    depends: list[str] = field(default_factory=list)

    @classmethod
    def from_json(cls, text: str) -> Group:
        """Decode a group from its JSON text."""
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise SelectionError(f"serde: {exc}") from exc
        if not isinstance(data, dict):
            raise SelectionError("serde: expected a JSON object")
        try:
            return cls(
                name=_string(data, "name"),
                summary=_string(data, "summary"),
                description=_string(data, "description"),
                required=_string_list(data, "required"),
                depends=_string_list(data, "depends") if "depends" in data else [],
            )
        except KeyError as exc:
            raise SelectionError(f"serde: missing field `{exc.args[0]}`") from exc

    def __str__(self) -> str:
        return self.summary


class Manager:
    """Holds selection groups by name and resolves their packages."""

    def __init__(self, groups: Iterable[Group] = ()) -> None:
        self._groups: dict[str, Group] = {g.name: g for g in groups}

    def insert(self, group: Group) -> None:
        """Add or replace a group."""
        self._groups[group.name] = group

    def groups(self) -> Iterator[Group]:
        """Iterate over the groups in name order."""
        return (self._groups[name] for name in sorted(self._groups))

    def _get_deps(self, name: str) -> list[str]:
        group = self._groups.get(name)
        if group is None:
            raise UnknownGroupError(name)
        depends = list(group.depends)
        for parent in group.depends:
            depends.extend(self._get_deps(parent))
        return depends

    def selections_with(self, ids: Iterable[str]) -> list[str]:
        """Return the sorted, de-duplicated packages required by the groups and their dependencies."""
        selected: set[str] = set()
        for item in ids:
            selected.update(self._get_deps(item))
            selected.add(item)
        packages = {
            pkg
            for name in selected
            if name in self._groups
            for pkg in self._groups[name].required
        }
        return sorted(packages)