"""Test configuration and shared fixtures.

Provide isolated settings, a recording logger and a client factory so that
tests never depend on environment files or a configured `PING_CHECK`.
"""
from contextlib import ExitStack
from typing import Any, Callable, Generator, Mapping, Optional

import pytest
from fastapi.testclient import TestClient

from pingprobe.config import Settings
from pingprobe.core.types import Severity
from pingprobe.main import create_app


# ==============================================================================
# LOGGING FIXTURES
# ==============================================================================

class RecordingLogger:
    """Probe logger that keeps every emission in memory, in order."""

    def __init__(self) -> None:
        self.records: list[tuple[Severity, str, dict[str, Any]]] = []

    def log(self, severity: Severity, message: str, context: Mapping[str, Any]) -> None:
        self.records.append((severity, message, dict(context)))

    def clean_logs(self) -> list[tuple[Severity, str, dict[str, Any]]]:
        """Return the recorded emissions and forget them."""
        records, self.records = self.records, []
        return records


@pytest.fixture
def logger() -> RecordingLogger:
    """Provide a fresh recording logger."""
    return RecordingLogger()


# ==============================================================================
# CONFIGURATION FIXTURES
# ==============================================================================

@pytest.fixture(scope="session")
def mock_settings() -> Settings:
    """Provide isolated test configuration.

    Returns:
        Settings: Development settings with no check configured.
    """
    return Settings(
        ENVIRONMENT="development",
        LOG_LEVEL="debug",
        PING_CHECK=None,
        _env_file=None  # Bypass any local environment file
    )


# ==============================================================================
# CLIENT FIXTURES
# ==============================================================================

ClientFactory = Callable[..., TestClient]


@pytest.fixture
def make_client(mock_settings: Settings) -> Generator[ClientFactory, None, None]:
    """Provide a factory building test clients around a fresh application.

    Every client is entered (running the lifespan) and closed when the test
    finishes.

    Yields:
        Callable: ``make_client(check=None, logger=None, settings=None)``.
    """
    with ExitStack() as stack:
        def _make(
            check: Optional[Callable[[], Any]] = None,
            logger: Optional[RecordingLogger] = None,
            settings: Optional[Settings] = None,
        ) -> TestClient:
            app = create_app(
                settings=settings or mock_settings,
                check=check,
                logger=logger,
            )
            return stack.enter_context(TestClient(app))

        yield _make


@pytest.fixture
def client(make_client: ClientFactory, logger: RecordingLogger) -> TestClient:
    """Provide a client for an application without a check."""
    return make_client(logger=logger)
