from __future__ import annotations


class HookifyError(Exception):
    """Base class for every error raised by hookify.

    Errors raised while a single operation is processed carry the
    operation name and route so callers can report a precise location.
    The contract builder fills these in via :meth:`at`.
    """

    def __init__(
        self,
        message: str,
        *,
        operation_name: str | None = None,
        route: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.operation_name = operation_name
        self.route = route

    def at(self, operation_name: str, route: str) -> HookifyError:
        if self.operation_name is None:
            self.operation_name = operation_name
        if self.route is None:
            self.route = route
        return self

    def __str__(self) -> str:
        if self.operation_name is None:
            return self.message
        location = self.operation_name
        if self.route is not None:
            location = f"{location} ({self.route})"
        return f"{location}: {self.message}"


class SpecError(HookifyError):
    pass


class UnresolvedSchemaReferenceError(SpecError):
    pass


class ConfigError(HookifyError):
    pass


class UnknownFlavorError(HookifyError):
    pass


class MalformedParameterError(HookifyError):
    pass


class UnsupportedParameterLocationError(HookifyError):
    pass


class UnsupportedVerbError(HookifyError):
    pass
