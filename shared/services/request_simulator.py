"""
Request Simulator: stands in for the lesson backend.

Every call reproduces real-world call characteristics so loading states,
error boundaries and retry logic can be exercised without a live server:

1. a fresh trace id and start timestamp (RequestContext)
2. latency jitter: one suspension drawn from [min, max) milliseconds;
   the reported latencyMs is the elapsed time, never below the drawn delay
3. chaos injection: one uniform draw r in [0, 1)
       r < 0.10          -> UpstreamFailureError (500)
       0.10 <= r < 0.20  -> AuthFailureError (401)
       r >= 0.20         -> lesson lookup
4. lookup: LessonNotFoundError (404) or a ResponseEnvelope (200)

The simulator never retries or recovers; every failure reaches the caller.
The random source, sleep, clock and id factory are injectable so tests can
force each branch deterministically.
"""

import asyncio
import json
import logging
import random
import time
import uuid
from typing import Awaitable, Callable, NoReturn, Optional, Protocol

from config import Settings, get_settings
from shared.models.domain import Lesson, RequestContext
from shared.models.request_log import RequestLogEntry, RequestLogStore, get_request_log_store
from shared.models.schemas import ResponseEnvelope, ResponseMeta
from shared.repositories.lesson_fixtures import get_lesson_repository
from shared.repositories.lesson_repository import LessonRepository
from shared.utils.constants import REQUEST_ID_PREFIX, REQUEST_ID_TOKEN_LENGTH, STATUS_OK
from shared.utils.exceptions import (
    ApiError,
    AuthFailureError,
    ErrorKind,
    LessonNotFoundError,
    UpstreamFailureError,
)

logger = logging.getLogger(__name__)


class RandomSource(Protocol):
    """Anything with ``random() -> float`` in [0, 1), e.g. ``random.Random``."""

    def random(self) -> float:
        ...


def generate_request_id() -> str:
    """Short opaque trace id for log correlation, e.g. ``req_3f9a1c0b7d2e``."""
    return f"{REQUEST_ID_PREFIX}{uuid.uuid4().hex[:REQUEST_ID_TOKEN_LENGTH]}"


class RequestSimulator:
    """
    Simulated lesson API with latency jitter and probabilistic failures.

    Stateless between calls apart from the random source; concurrent calls
    each get their own RequestContext.
    """

    def __init__(
        self,
        repository: LessonRepository,
        *,
        settings: Optional[Settings] = None,
        rng: Optional[RandomSource] = None,
        sleep: Optional[Callable[[float], Awaitable[None]]] = None,
        clock: Optional[Callable[[], float]] = None,
        request_id_factory: Optional[Callable[[], str]] = None,
        request_log: Optional[RequestLogStore] = None,
    ):
        settings = settings or get_settings()
        self.repository = repository
        self.min_latency_ms = settings.sim_min_latency_ms
        self.max_latency_ms = settings.sim_max_latency_ms
        self.upstream_failure_threshold = settings.sim_upstream_failure_rate
        self.auth_failure_threshold = settings.auth_failure_threshold
        self.chaos_enabled = settings.sim_chaos_enabled

        self._rng = rng if rng is not None else random.Random(settings.sim_random_seed)
        self._sleep = sleep or asyncio.sleep
        self._clock = clock or time.monotonic
        self._new_request_id = request_id_factory or generate_request_id
        self.request_log = request_log

    # ─── Draws ─────────────────────────────────────────────────────────

    def draw_latency_ms(self) -> int:
        """Uniform integer latency in [min_latency_ms, max_latency_ms)."""
        span = self.max_latency_ms - self.min_latency_ms
        return self.min_latency_ms + int(self._rng.random() * span)

    def draw_failure(self) -> Optional[ErrorKind]:
        """
        Single chaos draw with cumulative cutpoints.

        Returns:
            The failure kind to raise, or None to proceed to the lookup
        """
        if not self.chaos_enabled:
            return None

        r = self._rng.random()
        if r < self.upstream_failure_threshold:
            return ErrorKind.UPSTREAM_FAILURE
        if r < self.auth_failure_threshold:
            return ErrorKind.AUTH_FAILURE
        return None

    # ─── Primary entry point ───────────────────────────────────────────

    async def fetch_lesson(self, lesson_id: str) -> ResponseEnvelope[Lesson]:
        """
        Fetch a lesson with simulated network conditions.

        Args:
            lesson_id: The lesson id to fetch

        Returns:
            ResponseEnvelope wrapping the lesson with requestId/latencyMs/status

        Raises:
            UpstreamFailureError: chaos draw r < 0.10
            AuthFailureError: chaos draw 0.10 <= r < 0.20
            LessonNotFoundError: lesson_id not in the repository
        """
        context = RequestContext(request_id=self._new_request_id(), started_at=self._clock())

        delay_ms = self.draw_latency_ms()
        await self._sleep(delay_ms / 1000)

        failure = self.draw_failure()
        if failure is ErrorKind.UPSTREAM_FAILURE:
            self._fail(UpstreamFailureError(context.request_id, self._elapsed(context, delay_ms)), lesson_id)
        if failure is ErrorKind.AUTH_FAILURE:
            self._fail(AuthFailureError(context.request_id, self._elapsed(context, delay_ms)), lesson_id)

        lesson = self.repository.get_by_id(lesson_id)
        latency_ms = self._elapsed(context, delay_ms)

        if lesson is None:
            self._fail(LessonNotFoundError(lesson_id, context.request_id, latency_ms), lesson_id)

        envelope = ResponseEnvelope[Lesson](
            data=lesson,
            meta=ResponseMeta(
                request_id=context.request_id,
                latency_ms=latency_ms,
                status=STATUS_OK,
            ),
        )
        self._record(context.request_id, lesson_id, "success", STATUS_OK, latency_ms)
        logger.info(json.dumps({
            "step": "LESSON_API_CALL",
            "status": "success",
            "request_id": context.request_id,
            "lesson_id": lesson_id,
            "latency_ms": latency_ms,
        }))
        return envelope

    # ─── Helpers ───────────────────────────────────────────────────────

    def _elapsed(self, context: RequestContext, delay_ms: int) -> int:
        # never below the drawn delay, whatever the clock resolution
        return max(delay_ms, context.elapsed_ms(self._clock()))

    def _fail(self, error: ApiError, lesson_id: str) -> NoReturn:
        latency_ms = error.latency_ms or 0
        self._record(error.request_id, lesson_id, error.kind.value, error.status, latency_ms, error.message)
        logger.warning(json.dumps({
            "step": "LESSON_API_CALL",
            "status": "failed",
            "error_kind": error.kind.value,
            "http_status": error.status,
            "request_id": error.request_id,
            "lesson_id": lesson_id,
            "latency_ms": latency_ms,
        }))
        raise error

    def _record(
        self,
        request_id: str,
        lesson_id: str,
        outcome: str,
        status: int,
        latency_ms: int,
        message: Optional[str] = None,
    ) -> None:
        if self.request_log is None:
            return
        self.request_log.add(RequestLogEntry(
            request_id=request_id,
            lesson_id=lesson_id,
            outcome=outcome,
            status=status,
            latency_ms=latency_ms,
            message=message,
        ))


# Global simulator instance
_simulator: Optional[RequestSimulator] = None


def get_request_simulator() -> RequestSimulator:
    """Get or create the process-wide simulator over the fixture catalog."""
    global _simulator
    if _simulator is None:
        _simulator = RequestSimulator(
            get_lesson_repository(),
            request_log=get_request_log_store(),
        )
    return _simulator


def reset_request_simulator():
    """Reset the global simulator instance (useful for testing)."""
    global _simulator
    _simulator = None


async def fetch_lesson(lesson_id: str) -> ResponseEnvelope[Lesson]:
    """Module-level shortcut for ``get_request_simulator().fetch_lesson``."""
    return await get_request_simulator().fetch_lesson(lesson_id)
