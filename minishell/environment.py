"""Ordered store of shell variables."""

from __future__ import annotations

from collections.abc import Iterable, Iterator


class Environment:
    """Shell variables kept in insertion order; a value may be ``None``."""

    def __init__(self, items: Iterable[tuple[str, str | None]] | None = None) -> None:
        self._vars: dict[str, str | None] = dict(items or ())

    @classmethod
    def from_entries(cls, entries: Iterable[str]) -> "Environment":
        """Build from ``KEY=VALUE`` strings, skipping those without ``=``."""
        env = cls()
        for entry in entries:
            key, sep, value = entry.partition("=")
            if sep:
                env._vars[key] = value
        return env

    def get(self, key: str) -> str | None:
        """Return the value of ``key``; a leading ``$`` is ignored."""
        if key.startswith("$"):
            key = key[1:]
        if not key:
            return None
        return self._vars.get(key)

    def set(self, key: str, value: str | None) -> None:
        """Set ``key`` to ``value``, adding it at the end if new."""
        self._vars[key] = value

    def export(self, key: str, value: str | None) -> None:
        """Add or update ``key``; an existing value is kept when ``value`` is None."""
        if key in self._vars and value is None:
            return
        self._vars[key] = value

    def unset(self, key: str) -> None:
        """Remove ``key`` if present."""
        self._vars.pop(key, None)

    def items(self) -> list[tuple[str, str | None]]:
        """Return the variables in insertion order."""
        return list(self._vars.items())

    def to_strings(self) -> list[str]:
        """Return ``KEY=VALUE`` strings for handing to a child process."""
        return [f"{key}={value or ''}" for key, value in self._vars.items()]

    def as_dict(self) -> dict[str, str]:
        """Return a plain mapping suitable for a child process environment."""
        return {key: value or "" for key, value in self._vars.items()}

    def sorted_items(self) -> list[tuple[str, str | None]]:
        """Return the variables sorted by name."""
        return sorted(self._vars.items(), key=lambda item: item[0])

    def __contains__(self, key: object) -> bool:
        return key in self._vars

    def __iter__(self) -> Iterator[str]:
        return iter(self._vars)

    def __len__(self) -> int:
        return len(self._vars)

    def __repr__(self) -> str:
        return f"Environment({self._vars!r})"