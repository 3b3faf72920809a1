"""Map the outcome of a check to a response status and log severity.

Decision table, checked against the fault's kind tag:

    ======================  ======  ========
    Outcome                 Status  Severity
    ======================  ======  ========
    success                 200     (none)
    promoted diagnostic     500     error
    recoverable             503     critical
    severe                  500     critical
    ordinary                500     error
    ======================  ======  ========

Failure bodies are the status reason phrase. The fault message is never
placed in the body.
"""

from http import HTTPStatus

from fastapi import status

from pingprobe.core.types import Classification, FaultKind, Outcome, Severity

SUCCESS_BODY = "pong"

_DECISIONS: dict[FaultKind, tuple[int, Severity]] = {
    FaultKind.PROMOTED_DIAGNOSTIC: (status.HTTP_500_INTERNAL_SERVER_ERROR, Severity.ERROR),
    FaultKind.RECOVERABLE: (status.HTTP_503_SERVICE_UNAVAILABLE, Severity.CRITICAL),
    FaultKind.SEVERE: (status.HTTP_500_INTERNAL_SERVER_ERROR, Severity.CRITICAL),
    FaultKind.ORDINARY: (status.HTTP_500_INTERNAL_SERVER_ERROR, Severity.ERROR),
}


def classify(outcome: Outcome) -> Classification:
    """Derive the classification for a single outcome."""
    if outcome.fault is None:
        return Classification(status_code=status.HTTP_200_OK, body=SUCCESS_BODY)

    status_code, severity = _DECISIONS[outcome.fault.kind]
    return Classification(
        status_code=status_code,
        severity=severity,
        body=HTTPStatus(status_code).phrase,
    )
