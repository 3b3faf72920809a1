"""Run a health check exactly once and capture what happened.

Warnings emitted anywhere while the check runs are intercepted. Deprecation
warnings are logged at notice level and the check carries on. Any other
warning is raised as `DiagnosticError` at the point it was emitted, which
ends the check there. Warnings emitted on other threads are never raised
into those threads; the first one fails the check after it returns.

The warnings filters and `warnings.showwarning` are process-wide, so the
interception is installed inside `warnings.catch_warnings()` (restored on
every exit path) and serialized with a module-level lock.
"""

import threading
import warnings
from contextlib import contextmanager
from typing import Any, Callable, Iterator, Optional

from pingprobe.core.exceptions import DependencyUnavailable, DiagnosticError
from pingprobe.core.logger import NullProbeLogger, ProbeLogger
from pingprobe.core.types import Diagnostic, Fault, FaultKind, Outcome, Severity

Probe = Callable[[], Any]

DEPRECATION_CATEGORIES: tuple[type[Warning], ...] = (
    DeprecationWarning,
    PendingDeprecationWarning,
    FutureWarning,
)
RECOVERABLE_EXCEPTIONS: tuple[type[BaseException], ...] = (
    DependencyUnavailable,
    OSError,
)
SEVERE_EXCEPTIONS: tuple[type[BaseException], ...] = (
    AssertionError,
    MemoryError,
    RecursionError,
    SystemError,
)

# Reentrant so a check may itself run a nested invoker.
_INTERCEPTION_LOCK = threading.RLock()


class ProbeInvoker:
    """Invoke a check and turn its result into an `Outcome`.

    Args:
        logger: Receives notices for suppressed deprecation warnings.
        recoverable: Exception types reported as a recoverable fault.
        severe: Exception types reported as a severe fault.
        deprecations: Warning categories that are logged instead of failing.
    """

    def __init__(
        self,
        logger: Optional[ProbeLogger] = None,
        recoverable: tuple[type[BaseException], ...] = RECOVERABLE_EXCEPTIONS,
        severe: tuple[type[BaseException], ...] = SEVERE_EXCEPTIONS,
        deprecations: tuple[type[Warning], ...] = DEPRECATION_CATEGORIES,
    ) -> None:
        self._logger = logger if logger is not None else NullProbeLogger()
        self._recoverable = recoverable
        self._severe = severe
        self._deprecations = deprecations

    def invoke(self, probe: Optional[Probe]) -> Outcome:
        """Run `probe` once.

        `KeyboardInterrupt`, `SystemExit` and other exceptions outside the
        `Exception` hierarchy are not captured.

        Returns:
            Outcome: Success, or the captured fault.
        """
        if probe is None:
            return Outcome.success()

        deferred: list[DiagnosticError] = []
        try:
            with self._intercept_warnings(deferred):
                probe()
        except Exception as exc:
            return Outcome.failed(self._capture(exc))

        if deferred:
            return Outcome.failed(self._capture(deferred[0]))

        return Outcome.success()

    @contextmanager
    def _intercept_warnings(self, deferred: list[DiagnosticError]) -> Iterator[None]:
        owner = threading.get_ident()

        def handle_warning(
            message: Warning | str,
            category: type[Warning],
            filename: str,
            lineno: int,
            file: Any = None,
            line: Optional[str] = None,
        ) -> None:
            text = str(message)

            if issubclass(category, self._deprecations):
                self._logger.log(Severity.NOTICE, text, {})
                return

            error = DiagnosticError(text, category, filename, lineno)
            if threading.get_ident() != owner:
                # Other threads keep running; the check fails once it returns.
                deferred.append(error)
                return

            raise error

        with _INTERCEPTION_LOCK, warnings.catch_warnings():
            # "always" so repeated warnings from the same line are not
            # deduplicated by the registry.
            warnings.simplefilter("always")
            warnings.showwarning = handle_warning
            yield

    def _capture(self, exc: Exception) -> Fault:
        if isinstance(exc, DiagnosticError):
            return Fault(
                kind=FaultKind.PROMOTED_DIAGNOSTIC,
                message=exc.message,
                exception=exc,
                diagnostic=Diagnostic(
                    category=exc.category,
                    message=exc.message,
                    filename=exc.filename,
                    lineno=exc.lineno,
                ),
            )

        if isinstance(exc, self._recoverable):
            kind = FaultKind.RECOVERABLE
        elif isinstance(exc, self._severe):
            kind = FaultKind.SEVERE
        else:
            kind = FaultKind.ORDINARY

        return Fault(kind=kind, message=str(exc), exception=exc)
