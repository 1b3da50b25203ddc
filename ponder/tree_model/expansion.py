"""Path-keyed set of directories currently rendered open."""

from __future__ import annotations

from collections.abc import Iterable, Iterator


class ExpansionState:
    """Mutable expansion set merged from user toggles and filter auto-expansion.

    Membership is not checked against any tree; paths that no longer exist are
    simply never rendered.
    """

    def __init__(self, paths: Iterable[str] = ()) -> None:
        self._expanded: set[str] = set(paths)

    def __contains__(self, path: object) -> bool:
        return path in self._expanded

    def __iter__(self) -> Iterator[str]:
        return iter(self._expanded)

    def __len__(self) -> int:
        return len(self._expanded)

    def __repr__(self) -> str:
        return f"ExpansionState({sorted(self._expanded)!r})"

    def is_expanded(self, path: str) -> bool:
        return path in self._expanded

    def toggle(self, path: str) -> bool:
        """Flip membership of ``path`` and return whether it is now expanded."""
        if path in self._expanded:
            self._expanded.discard(path)
            return False
        self._expanded.add(path)
        return True

    def merge_auto_expand(self, paths: Iterable[str]) -> None:
        """Add ``paths`` to the set; never removes anything."""
        self._expanded.update(paths)

    def reset(self) -> None:
        self._expanded.clear()


__all__ = ["ExpansionState"]
