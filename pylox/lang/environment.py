"""Lexically-scoped variable bindings. Scopes form a chain from the innermost block to the program root; a child holds
a plain reference to its parent and never copies it, so assignments made inside a block are visible outside it.
"""

from pylox.lang.error import LoxRuntimeError


class Environment:
    """Governs the bindings of one scope, with access to every enclosing scope through parent."""

    def __init__(self, parent=None):
        self.parent = parent
        self.values = {}  # name: value bound in this scope only

    def define(self, name, value):
        """Binds name in this scope. Redefining is allowed; a binding in a parent scope is shadowed, never touched."""
        self.values[name] = value

    def get(self, name, line=None):
        """Returns the innermost binding of name. Reading a name that was never declared is a runtime error."""
        scope = self.resolve(name)
        if scope is None:
            raise LoxRuntimeError(f"Undefined variable '{name}'.", line, f" at '{name}'", name)
        return scope.values[name]

    def assign(self, name, value, line=None):
        """Overwrites the innermost existing binding of name."""
        scope = self.resolve(name)
        if scope is None:
            raise LoxRuntimeError(f"Undefined variable '{name}'.", line, f" at '{name}'", name)
        scope.values[name] = value

    def resolve(self, name):
        """Returns the nearest scope (starting with self) that binds name, or None."""
        scope = self
        while scope is not None:
            if name in scope.values:
                return scope
            scope = scope.parent
        return None

    def __contains__(self, name):
        return self.resolve(name) is not None

    def __repr__(self):
        content = ", ".join(self.values)
        return f"[{content}]" + (f" < {self.parent!r}" if self.parent is not None else "")
