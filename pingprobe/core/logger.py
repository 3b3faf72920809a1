"""Logger collaborator used by the ping controller.

The controller speaks in three severity tiers (notice, error, critical) and
always passes a context mapping. `StructlogProbeLogger` adapts that to a
structlog bound logger; `NullProbeLogger` is used when no logger is given.
"""

from typing import Any, Mapping, Protocol

from pingprobe.core.logging_config import get_logger
from pingprobe.core.types import Fault, Severity


class ProbeLogger(Protocol):
    """Anything that can receive ping log emissions."""

    def log(self, severity: Severity, message: str, context: Mapping[str, Any]) -> None:
        ...


class NullProbeLogger:
    """Discard every emission."""

    def log(self, severity: Severity, message: str, context: Mapping[str, Any]) -> None:
        return None


# Stdlib logging has no NOTICE level; notices go out as INFO and keep their
# tier in the `severity` key.
_STDLIB_METHODS: dict[Severity, str] = {
    Severity.NOTICE: "info",
    Severity.ERROR: "error",
    Severity.CRITICAL: "critical",
}

_RESERVED_KEYS = frozenset({"event", "severity", "fault_kind", "fault_message", "exc_info"})


class StructlogProbeLogger:
    """Forward ping emissions to a structlog logger.

    A `fault` entry in the context is flattened into structured keys
    (`fault_kind`, `fault_message`) and its exception is passed as
    `exc_info` so the formatter renders the traceback. Other context keys
    that would clash with those, or with `event` and `severity`, are
    prefixed with `context_`.

    Args:
        logger: A structlog bound logger. Defaults to the ``pingprobe.ping``
            logger.
    """

    def __init__(self, logger: Any = None) -> None:
        self._logger = logger if logger is not None else get_logger("pingprobe.ping")

    def log(self, severity: Severity, message: str, context: Mapping[str, Any]) -> None:
        method = getattr(self._logger, _STDLIB_METHODS[severity])

        fields: dict[str, Any] = {}
        for key, value in context.items():
            if key in _RESERVED_KEYS:
                fields[f"context_{key}"] = value
            elif key != "fault" or not isinstance(value, Fault):
                fields[key] = value

        fault = context.get("fault")
        if isinstance(fault, Fault):
            fields["fault_kind"] = fault.kind.value
            fields["fault_message"] = fault.message
            fields["exc_info"] = fault.exception

        method(message, severity=severity.value, **fields)
