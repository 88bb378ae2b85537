"""Mapping of Finnhub status codes to local responses.

Every proxy operation runs the upstream status through
``classify_upstream_status`` and then ``check_upstream_response`` with its own
``ErrorPolicy``. Surfaced failures are raised as ``UpstreamError``; maskable
failures are returned so the caller can substitute placeholder data.
"""

from dataclasses import dataclass
from enum import StrEnum

import structlog

from stock_tracker.exceptions import UpstreamError
from stock_tracker.market.providers.base import UpstreamResponse

logger = structlog.get_logger()

UNAUTHORIZED_MESSAGE = "API key invalid or expired"
RATE_LIMITED_MESSAGE = "Rate limit exceeded"
UNCLASSIFIED_MESSAGE = "Failed to fetch data from Finnhub"


class UpstreamOutcome(StrEnum):
    OK = "ok"
    UNAUTHORIZED = "unauthorized"
    FORBIDDEN = "forbidden"
    RATE_LIMITED = "rate_limited"
    UNCLASSIFIED = "unclassified"


_STATUS_OUTCOMES = {
    200: UpstreamOutcome.OK,
    401: UpstreamOutcome.UNAUTHORIZED,
    403: UpstreamOutcome.FORBIDDEN,
    429: UpstreamOutcome.RATE_LIMITED,
}


@dataclass(frozen=True)
class ErrorPolicy:
    operation: str
    forbidden_message: str
    mask_failures: bool = False


def classify_upstream_status(status_code: int) -> UpstreamOutcome:
    return _STATUS_OUTCOMES.get(status_code, UpstreamOutcome.UNCLASSIFIED)


def _surfaced_status(status_code: int) -> int:
    # 1xx-3xx cannot carry an error envelope
    return status_code if status_code >= 400 else 502


def check_upstream_response(
    response: UpstreamResponse, policy: ErrorPolicy, **context: str
) -> UpstreamOutcome:
    """Return the outcome for a usable or masked response, raise for surfaced ones."""
    outcome = classify_upstream_status(response.status_code)
    log = logger.bind(operation=policy.operation, status_code=response.status_code, **context)

    match outcome:
        case UpstreamOutcome.OK:
            return outcome

        case UpstreamOutcome.UNAUTHORIZED:
            log.warning("upstream_unauthorized")
            raise UpstreamError(UNAUTHORIZED_MESSAGE, status_code=401)

        case UpstreamOutcome.RATE_LIMITED:
            log.warning("upstream_rate_limited")
            raise UpstreamError(RATE_LIMITED_MESSAGE, status_code=429)

        case UpstreamOutcome.FORBIDDEN:
            log.warning("upstream_forbidden", masked=policy.mask_failures)
            if policy.mask_failures:
                return outcome
            raise UpstreamError(policy.forbidden_message, status_code=403)

        case _:
            log.warning("upstream_unexpected_status", masked=policy.mask_failures)
            if policy.mask_failures:
                return outcome
            raise UpstreamError(
                UNCLASSIFIED_MESSAGE, status_code=_surfaced_status(response.status_code)
            )
