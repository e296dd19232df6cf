"""
Per-recipient retry loop.

Each attempt races the transport call against a timeout. Failed attempts
are followed by a fixed backoff until the attempt budget is spent, after
which the fallback sink produces the final (successful) result. The real
provider failure is then only visible in the logs.
"""

import asyncio
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from enum import Enum

import structlog

from ...channels import EMAIL_TIMEOUT_SECONDS, SMS_TIMEOUT_SECONDS, MockFallbackSink
from ...domain.models import DeliveryResult, Recipient
from ...domain.ports import TransportAdapter
from ...infrastructure.logging import Timer

logger = structlog.get_logger()

MAX_RETRIES = 2
RETRY_BACKOFF_SECONDS = 5.0


@dataclass(frozen=True)
class RetryPolicy:
    """Fixed attempt budget for one transport."""

    attempt_timeout: float
    max_retries: int = MAX_RETRIES
    backoff_seconds: float = RETRY_BACKOFF_SECONDS

    def __post_init__(self) -> None:
        if self.max_retries < 0:
            raise ValueError("max_retries cannot be negative")
        if self.attempt_timeout <= 0:
            raise ValueError("attempt_timeout must be positive")

    @property
    def max_attempts(self) -> int:
        return self.max_retries + 1


EMAIL_RETRY_POLICY = RetryPolicy(attempt_timeout=EMAIL_TIMEOUT_SECONDS)
SMS_RETRY_POLICY = RetryPolicy(attempt_timeout=SMS_TIMEOUT_SECONDS)


class ExecutionState(str, Enum):
    """Terminal states of one execution."""

    SUCCEEDED = "succeeded"
    EXHAUSTED_FALLEN_BACK = "exhausted_fallen_back"


@dataclass(frozen=True)
class ExecutionOutcome:
    state: ExecutionState
    result: DeliveryResult
    attempts: int
    errors: tuple[str, ...] = ()


class RetryExecutor:
    """Delivers to one recipient through one transport, with bounded retries."""

    def __init__(
        self,
        policy: RetryPolicy,
        fallback: MockFallbackSink,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self._policy = policy
        self._fallback = fallback
        self._sleep = sleep

    async def execute(
        self,
        transport: TransportAdapter,
        recipient: Recipient,
        body: str,
        subject: str | None = None,
    ) -> ExecutionOutcome:
        """
        Attempt delivery until success or until the attempt budget is spent.

        Never raises for transport failures; exhaustion ends in the
        fallback sink, whose result is returned as the final result.
        """
        policy = self._policy
        errors: list[str] = []
        attempt = 0

        while attempt < policy.max_attempts:
            attempt += 1
            logger.info(
                "Delivery attempt",
                provider=transport.provider_name,
                attempt=attempt,
                max_attempts=policy.max_attempts,
            )

            with Timer() as timer:
                error = None
                try:
                    result = await asyncio.wait_for(
                        transport.send(recipient, body, subject),
                        timeout=policy.attempt_timeout,
                    )
                except asyncio.TimeoutError:
                    error = f"Timed out after {policy.attempt_timeout}s"
                except Exception as e:
                    error = str(e) or type(e).__name__
                else:
                    if not result.success:
                        error = result.error_detail or "Provider reported failure"

            if error is None:
                logger.info(
                    "Delivery attempt succeeded",
                    provider=transport.provider_name,
                    attempt=attempt,
                    message_id=result.message_id,
                    duration_ms=timer.duration_ms,
                )
                return ExecutionOutcome(
                    state=ExecutionState.SUCCEEDED,
                    result=result,
                    attempts=attempt,
                    errors=tuple(errors),
                )

            errors.append(error)
            logger.warning(
                "Delivery attempt failed",
                provider=transport.provider_name,
                attempt=attempt,
                max_attempts=policy.max_attempts,
                error=error,
                duration_ms=timer.duration_ms,
            )

            if attempt < policy.max_attempts:
                logger.info("Retrying after backoff", backoff_seconds=policy.backoff_seconds)
                await self._sleep(policy.backoff_seconds)

        logger.error(
            "All delivery attempts failed, using fallback sink",
            provider=transport.provider_name,
            attempts=attempt,
            errors=errors,
            fallback=self._fallback.provider_name,
        )
        result = await self._fallback.send(recipient, body, subject)
        return ExecutionOutcome(
            state=ExecutionState.EXHAUSTED_FALLEN_BACK,
            result=result,
            attempts=attempt,
            errors=tuple(errors),
        )
