__all__ = [
    "DependencyError",
    "DuplicateBindingError",
    "UndefinedTargetError",
    "NullTargetError",
    "NotAFunctionError",
    "UnmappedNameError",
]


class DependencyError(Exception):
    """Base class for errors raised while binding or resolving components."""

    pass


class DuplicateBindingError(DependencyError):
    """Raised when a name is bound more than once in the same container."""

    pass


class UndefinedTargetError(DependencyError):
    """Raised when a binding is made without supplying a target."""

    pass


class NullTargetError(DependencyError, ValueError):
    """Raised when a binding is made to ``None``."""

    pass


class NotAFunctionError(DependencyError, TypeError):
    """Raised when a factory or constructor target cannot be invoked."""

    pass


class UnmappedNameError(DependencyError, LookupError):
    """Raised when resolving a name that has no binding."""

    def __init__(self, name: str):
        super().__init__(f"nothing is mapped for name '{name}'")
        self.name = name
