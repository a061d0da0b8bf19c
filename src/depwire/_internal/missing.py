from __future__ import annotations

from collections.abc import Iterator

from typing_extensions import Self


class MissingDependencies:
    """Accumulate the names of dependencies that could not be found.

    Each name is stored once, however many times it is inserted, and merging
    two sets yields their union. The injector builds one of these per
    ``inject`` call tree and raises it wrapped in
    ``DepwireDependenciesNotFoundError`` when it is not empty.

    Examples:
        .. code-block:: python

            missing = MissingDependencies("db")
            missing.insert("db")
            missing.merge(MissingDependencies("cache"))
            missing.names()  # ("cache", "db")

    """

    __slots__ = ("_names",)

    def __init__(self, *names: str) -> None:
        self._names: set[str] = set(names)

    def insert(self, name: str) -> None:
        """Add a missing dependency name. Adding a known name is a no-op."""
        self._names.add(name)

    def merge(self, other: MissingDependencies) -> Self:
        """Add every name of ``other`` to this set and return this set."""
        if other.is_empty():
            return self
        self._names.update(other._names)
        return self

    def names(self) -> tuple[str, ...]:
        """Return a sorted snapshot of the missing dependency names."""
        return tuple(sorted(self._names))

    def is_empty(self) -> bool:
        return not self._names

    def __len__(self) -> int:
        return len(self._names)

    def __iter__(self) -> Iterator[str]:
        return iter(self.names())

    def __contains__(self, name: object) -> bool:
        return name in self._names

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MissingDependencies):
            return NotImplemented
        return self._names == other._names

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        arguments = ", ".join(repr(name) for name in self.names())
        return f"MissingDependencies({arguments})"


__all__ = ["MissingDependencies"]
