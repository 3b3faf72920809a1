"""Ping controller: run the check, log the failure, render the response."""

import importlib
import inspect
from typing import Any, Optional

from pingprobe.core.classifier import classify
from pingprobe.core.exceptions import CheckImportError
from pingprobe.core.invoker import Probe, ProbeInvoker
from pingprobe.core.logger import NullProbeLogger, ProbeLogger
from pingprobe.core.renderer import render
from pingprobe.core.types import ResponseSpec

FAILURE_MESSAGE = "Ping failed"


class PingController:
    """Answer a ping by running an optional health check.

    Without a check every ping succeeds. Without a logger, log emissions are
    dropped silently.

    Args:
        check: Zero-argument callable that raises (or warns) when unhealthy.
        logger: Receives failure and deprecation emissions.
        expires_http10_only: Only send ``Expires: 0`` to HTTP/1.0 clients.
        invoker: Overrides the default invoker (e.g. to widen the set of
            recoverable exceptions). Its logger is used for deprecations.

    Raises:
        TypeError: If `check` is a coroutine function. Checks run
            synchronously and a coroutine would never be awaited.

    Example:
        >>> controller = PingController(lambda: None)
        >>> controller().body
        'pong'
    """

    def __init__(
        self,
        check: Optional[Probe] = None,
        logger: Optional[ProbeLogger] = None,
        expires_http10_only: bool = False,
        invoker: Optional[ProbeInvoker] = None,
    ) -> None:
        if check is not None and is_async_callable(check):
            raise TypeError(f"Check {check!r} is asynchronous; checks must be plain callables")

        self._check = check
        self._logger = logger if logger is not None else NullProbeLogger()
        self._expires_http10_only = expires_http10_only
        self._invoker = invoker if invoker is not None else ProbeInvoker(self._logger)

    def __call__(self, protocol_version: Optional[str] = None) -> ResponseSpec:
        """Handle one ping.

        Args:
            protocol_version: Protocol version declared by the client.

        Returns:
            ResponseSpec: 200 ``pong``, or a 500/503 reason phrase.
        """
        outcome = self._invoker.invoke(self._check)
        classification = classify(outcome)

        if outcome.fault is not None and classification.severity is not None:
            self._logger.log(classification.severity, FAILURE_MESSAGE, {"fault": outcome.fault})

        return render(classification, protocol_version, self._expires_http10_only)


def load_check(path: str) -> Probe:
    """Resolve a ``"package.module:attribute"`` path to a callable check.

    Raises:
        CheckImportError: If the path is malformed, the module cannot be
            imported, the attribute is missing, or it is not callable
            or is asynchronous.
    """
    module_name, sep, attribute = path.partition(":")
    if not sep or not module_name or not attribute:
        raise CheckImportError(f"Check path must look like 'module:callable', got '{path}'")

    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise CheckImportError(f"Cannot import check module '{module_name}': {e}") from e

    target = module
    for part in attribute.split("."):
        try:
            target = getattr(target, part)
        except AttributeError as e:
            raise CheckImportError(f"Check '{path}' does not exist") from e

    if not callable(target):
        raise CheckImportError(f"Check '{path}' is not callable")

    if is_async_callable(target):
        raise CheckImportError(f"Check '{path}' is asynchronous; checks must be plain callables")

    return target


def is_async_callable(target: Any) -> bool:
    """Tell whether calling `target` returns an awaitable instead of running it."""
    return inspect.iscoroutinefunction(target) or inspect.iscoroutinefunction(
        getattr(target, "__call__", None)
    )
