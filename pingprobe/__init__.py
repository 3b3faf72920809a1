# pingprobe/__init__.py
"""
Public API for the ping probe.

The FastAPI application lives in `pingprobe.main` and is not imported here,
so embedding the controller in another framework does not build an app.
"""

from .core.classifier import classify
from .core.controller import FAILURE_MESSAGE, PingController, load_check
from .core.exceptions import (
    CheckImportError,
    DependencyUnavailable,
    DiagnosticError,
    PingProbeError,
)
from .core.invoker import ProbeInvoker
from .core.logger import NullProbeLogger, ProbeLogger, StructlogProbeLogger
from .core.renderer import render
from .core.types import (
    Classification,
    Diagnostic,
    Fault,
    FaultKind,
    Outcome,
    ResponseSpec,
    Severity,
)

__all__ = [
    # Controller
    "PingController",
    "FAILURE_MESSAGE",
    "load_check",
    # Pipeline stages
    "ProbeInvoker",
    "classify",
    "render",
    # Logging collaborators
    "ProbeLogger",
    "NullProbeLogger",
    "StructlogProbeLogger",
    # Types
    "Classification",
    "Diagnostic",
    "Fault",
    "FaultKind",
    "Outcome",
    "ResponseSpec",
    "Severity",
    # Exceptions
    "PingProbeError",
    "DependencyUnavailable",
    "DiagnosticError",
    "CheckImportError",
]
