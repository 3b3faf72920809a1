"""Value types flowing through a single ping invocation.

A ping moves through three shapes: the `Outcome` of running the check, the
`Classification` derived from it, and the `ResponseSpec` rendered from that.
All of them are immutable Pydantic models created per request and discarded
once the response has been sent.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


# ═══════════════════════════════════════════════════════════════════════════
# BASE CONFIGURATION
# ═══════════════════════════════════════════════════════════════════════════

class ProbeModel(BaseModel):
    """Shared configuration for every ping value type.

    Configuration:
        frozen: Values are never mutated once produced.
        extra: Unknown fields are rejected.
        arbitrary_types_allowed: Faults hold the captured exception object.
    """
    model_config = ConfigDict(
        frozen=True,
        extra='forbid',
        arbitrary_types_allowed=True,
    )


# ═══════════════════════════════════════════════════════════════════════════
# ENUMS
# ═══════════════════════════════════════════════════════════════════════════

class Severity(str, Enum):
    """Log severity tiers emitted by the ping controller."""
    NOTICE = "notice"
    ERROR = "error"
    CRITICAL = "critical"


class FaultKind(str, Enum):
    """Tag attached to a fault when it is captured.

    The classifier dispatches on this tag only, never on the exception class.
    """
    RECOVERABLE = "recoverable"
    ORDINARY = "ordinary"
    SEVERE = "severe"
    PROMOTED_DIAGNOSTIC = "promoted_diagnostic"


# ═══════════════════════════════════════════════════════════════════════════
# INVOCATION RESULT
# ═══════════════════════════════════════════════════════════════════════════

class Diagnostic(ProbeModel):
    """A warning emitted while the check was running.

    Attributes:
        category: Warning class, which decides the severity tier.
        message: Warning text, unmodified.
        filename: File the warning was attributed to, if known.
        lineno: Line the warning was attributed to, if known.
    """
    category: type[Warning]
    message: str
    filename: Optional[str] = None
    lineno: Optional[int] = None


class Fault(ProbeModel):
    """The terminal abnormal result of running a check.

    Attributes:
        kind: Classification tag assigned at capture time.
        message: Human-readable message. Only ever written to logs.
        exception: The exception that ended the check.
        diagnostic: The originating warning, for promoted diagnostics only.
    """
    kind: FaultKind
    message: str
    exception: BaseException
    diagnostic: Optional[Diagnostic] = None


class Outcome(ProbeModel):
    """Result of one check invocation: success, or a single fault."""
    fault: Optional[Fault] = None

    @property
    def is_success(self) -> bool:
        return self.fault is None

    @classmethod
    def success(cls) -> 'Outcome':
        return cls()

    @classmethod
    def failed(cls, fault: Fault) -> 'Outcome':
        return cls(fault=fault)


# ═══════════════════════════════════════════════════════════════════════════
# CLASSIFICATION & RESPONSE
# ═══════════════════════════════════════════════════════════════════════════

class Classification(ProbeModel):
    """Status, log severity and body derived from an outcome.

    `severity` is None when nothing should be logged (success).
    """
    status_code: int = Field(ge=100, le=599)
    severity: Optional[Severity] = None
    body: str


class ResponseSpec(ProbeModel):
    """A fully rendered, transport-agnostic response.

    Attributes:
        status_code: HTTP status code.
        body: Plain-text body, sent verbatim.
        headers: Response headers, in emission order.
        requires_expires_override: The transport sends `Expires` exactly
            as given, and only when this is set.
    """
    status_code: int = Field(ge=100, le=599)
    body: str
    headers: dict[str, str]
    requires_expires_override: bool = False
