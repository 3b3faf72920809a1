"""Exception types raised and recognized by the ping probe.

Checks raise `DependencyUnavailable` to report a known, recoverable outage of
something they depend on. `DiagnosticError` is never raised by checks
directly: the probe invoker raises it at the `warnings.warn` call site when a
non-deprecation warning fires during a check.
"""

from typing import Optional


class PingProbeError(Exception):
    """Base class for all pingprobe errors."""


class DependencyUnavailable(PingProbeError):
    """A dependency the check relies on is down but expected to recover.

    Reported as 503 Service Unavailable.

    Example:
        >>> def check() -> None:
        ...     if not cache.ping():
        ...         raise DependencyUnavailable("cache did not answer")
    """


class DiagnosticError(PingProbeError):
    """A warning that was promoted to a fault while a check was running.

    Attributes:
        category: Warning class that was emitted (e.g. ``UserWarning``).
        filename: Source file the warning was attributed to.
        lineno: Line number the warning was attributed to.
    """

    def __init__(
        self,
        message: str,
        category: type[Warning],
        filename: Optional[str] = None,
        lineno: Optional[int] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.category = category
        self.filename = filename
        self.lineno = lineno

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}({self.message!r}, "
            f"category={self.category.__name__}, "
            f"filename={self.filename!r}, lineno={self.lineno!r})"
        )


class CheckImportError(PingProbeError):
    """A configured check import path could not be resolved to a callable."""
