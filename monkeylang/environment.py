"""Variable bindings for Monkey programs, with lexical nesting."""

from __future__ import annotations

from typing import Any


class Environment:
    """A scope of name bindings that falls back to an enclosing scope."""

    def __init__(self, outer: Environment | None = None) -> None:
        self._store: dict[str, Any] = {}
        self.outer = outer

    def get(self, name: str) -> Any | None:
        """Return the value bound to ``name`` here or in an outer scope, else None."""
        if name in self._store:
            return self._store[name]
        if self.outer is not None:
            return self.outer.get(name)
        return None

    def set(self, name: str, value: Any) -> Any:
        """Bind ``name`` to ``value`` in this scope and return the value."""
        self._store[name] = value
        return value

    def enclosed(self) -> Environment:
        """Return a new, empty scope whose outer scope is this one."""
        return Environment(self)

    def __contains__(self, name: object) -> bool:
        if name in self._store:
            return True
        return self.outer is not None and name in self.outer

    def __repr__(self) -> str:
        return f"Environment(names={sorted(self._store)!r})"