"""The shell's variable table and the state shared by its stages."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field

_PREVIOUS_DIR_NAME = "OLDPWD"


class Environment:
    """Ordered table of shell variables.

    A variable may exist without a value (``None``); such variables are
    listed by ``export`` but left out of the exported environment.
    """

    def __init__(self, envp: Iterable[str] | None = None) -> None:
        variables: dict[str, str | None] = {}
        for line in envp or ():
            key, sep, value = line.partition("=")
            if sep:
                variables.setdefault(key, value)
        if _PREVIOUS_DIR_NAME not in variables:
            variables = {_PREVIOUS_DIR_NAME: None, **variables}
        self._vars = variables

    def get(self, key: str) -> str | None:
        """Return the value of *key*, or None if unset or valueless."""
        return self._vars.get(key)

    def set(self, key: str, value: str | None = None) -> None:
        """Set *key* to *value*.

        An existing variable keeps its value when *value* is None; a new
        variable is added at the end.
        """
        if key in self._vars:
            if value is not None:
                self._vars[key] = value
            return
        self._vars[key] = value

    def unset(self, key: str) -> bool:
        """Remove *key*; return True if it was present."""
        return self._vars.pop(key, _MISSING) is not _MISSING

    def to_array(self) -> list[str]:
        """Return ``KEY=VALUE`` strings for every variable that has a value."""
        return [f"{key}={value}" for key, value in self._vars.items() if value is not None]

    def items(self) -> Iterator[tuple[str, str | None]]:
        """Iterate over ``(key, value)`` pairs in insertion order."""
        return iter(list(self._vars.items()))

    def __contains__(self, key: object) -> bool:
        return key in self._vars

    def __len__(self) -> int:
        return len(self._vars)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._vars))

    def __repr__(self) -> str:
        return f"Environment({self._vars!r})"


_MISSING = object()


@dataclass
class ShellState:
    """Variables and the last exit status of a running shell."""

    env: Environment = field(default_factory=Environment)
    last_exit_status: int = 0

    def get_env_value(self, key: str) -> str | None:
        """Look up *key*; a name starting with ``?`` gives the last exit status."""
        if key.startswith("?"):
            return str(self.last_exit_status)
        return self.env.get(key)