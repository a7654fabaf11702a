"""Variable scopes with an output sink for the scripting language."""

from __future__ import annotations

from typing import Callable, Dict, Optional

from modelhttp.value import LangError, Type, Value

OutputFunc = Callable[[str], None]


class Scope:
    """A table of variables, optionally chained to an enclosing scope."""

    def __init__(
        self,
        output: Optional[OutputFunc] = None,
        parent: Optional["Scope"] = None,
    ) -> None:
        self.parent = parent
        self._variables: Dict[str, Value] = {}
        if output is None and parent is not None:
            output = parent.output
        # Without a sink, written text is dropped.
        self.output: Optional[OutputFunc] = output

    def declare(self, name: str, type_: Type, value: Optional[Value] = None) -> None:
        """Declare a variable in this scope; without a value it is converted from "0"."""
        if name in self._variables:
            raise LangError(f"Variable '{name}' already declared")
        if value is None:
            value = Value.from_string(type_, "0")
        self._variables[name] = value

    def get(self, name: str) -> Value:
        scope: Optional[Scope] = self
        while scope is not None:
            if name in scope._variables:
                return scope._variables[name]
            scope = scope.parent
        raise LangError(f"Undefined variable '{name}'")

    def set(self, name: str, value: Value) -> None:
        scope: Optional[Scope] = self
        while scope is not None:
            if name in scope._variables:
                scope._variables[name] = value
                return
            scope = scope.parent
        raise LangError(f"Undefined variable '{name}'")

    def __contains__(self, name: str) -> bool:
        scope: Optional[Scope] = self
        while scope is not None:
            if name in scope._variables:
                return True
            scope = scope.parent
        return False

    def write(self, text: str) -> None:
        """Send text to this scope's output sink, if it has one."""
        if self.output is not None:
            self.output(text)