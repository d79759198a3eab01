"""
Lesson view controller.

Consumer of the request simulator: issues one call per interaction and turns
the envelope or the raised ApiError into view state. Recovery (retry, moving
on to the next lesson) happens here, never inside the simulator.
"""

import logging
import time
from typing import Callable, List, Optional

from lessons.models.view_state import DebugInfo, LessonViewState
from shared.models.request_log import RequestLogEntry
from shared.services.request_simulator import RequestSimulator
from shared.utils.constants import DEFAULT_LESSON_ID
from shared.utils.exceptions import ApiError

logger = logging.getLogger(__name__)


class LessonViewController:
    """
    Drives idle -> loading -> success | error for a single lesson view.

    Only the latest load counts: if a new load starts while an older one is
    still pending, the older result is discarded when it resolves.
    """

    def __init__(
        self,
        simulator: RequestSimulator,
        lesson_id: str = DEFAULT_LESSON_ID,
        clock: Optional[Callable[[], float]] = None,
    ):
        self.simulator = simulator
        self._clock = clock or time.monotonic
        self._generation = 0
        self.state = LessonViewState(lesson_id=lesson_id)

    async def load(self, lesson_id: Optional[str] = None) -> LessonViewState:
        """
        Fetch the target lesson and update state from the outcome.

        Args:
            lesson_id: Switch to this lesson first. If None, reloads the current one.

        Returns:
            The view state after this load resolved (or the newer state if superseded)
        """
        target = self.state.lesson_id if lesson_id is None else lesson_id
        same_lesson = target == self.state.lesson_id
        attempts = self.state.attempts + 1 if same_lesson else 1

        self._generation += 1
        generation = self._generation
        self.state = self.state.model_copy(update={
            "lesson_id": target,
            "status": "loading",
            "debug": None,
            "attempts": attempts,
            "lesson": self.state.lesson if same_lesson else None,
        })
        started_at = self._clock()

        try:
            response = await self.simulator.fetch_lesson(target)
        except ApiError as error:
            if generation != self._generation:
                logger.info(f"Discarding stale failure {error.request_id} for {target}")
                return self.state
            logger.error(f"Integration error: {error!r} ({error.message})")
            self.state = self.state.model_copy(update={
                "status": "error",
                "debug": DebugInfo(
                    request_id=error.request_id,
                    latency_ms=round((self._clock() - started_at) * 1000),
                    status_code=error.status,
                    error_message=error.message,
                    suggestion=error.suggestion,
                ),
            })
            return self.state

        if generation != self._generation:
            logger.info(f"Discarding stale response {response.meta.request_id} for {target}")
            return self.state

        self.state = self.state.model_copy(update={
            "status": "success",
            "lesson": response.data,
            "debug": DebugInfo(
                request_id=response.meta.request_id,
                latency_ms=response.meta.latency_ms,
                status_code=response.meta.status,
            ),
        })
        return self.state

    async def retry(self) -> LessonViewState:
        """Manual recovery: issue a fresh call for the current lesson."""
        return await self.load()

    async def load_next(self) -> LessonViewState:
        """
        Advance to the lesson after the current one.

        Leaves state untouched when the current lesson is last or unknown.
        """
        next_id = self.simulator.repository.get_next_id(self.state.lesson_id)
        if next_id is None:
            return self.state
        return await self.load(next_id)

    # ─── Request log lookups ───────────────────────────────────────────

    def history(self) -> List[RequestLogEntry]:
        """Logged calls for the current lesson, oldest first."""
        if self.simulator.request_log is None:
            return []
        return self.simulator.request_log.get_entries(lesson_id=self.state.lesson_id)

    def find_call(self, request_id: str) -> Optional[RequestLogEntry]:
        """
        Match a trace id shown in the debug panel to the call that produced it.

        Args:
            request_id: Trace id from DebugInfo or an error envelope

        Returns:
            The logged outcome, or None if unknown, evicted or not logged
        """
        if self.simulator.request_log is None:
            return None
        return self.simulator.request_log.get(request_id)
