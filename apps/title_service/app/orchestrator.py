from __future__ import annotations

from typing import Any, Dict

from blog_schemas.models import OperationKind, OperationState, OperationStatus
from shared.logging import get_logger

from .builders import BUILDERS
from .config import MAX_ATTEMPTS, STRICT_RESULT_COUNTS
from .context import AppContext
from .errors import ValidationError
from .graph import pipeline

logger = get_logger(__name__)


class Orchestrator:
    """
    Drives one operation per kind through idle -> in_flight -> succeeded/failed.

    Every trigger bumps the slot's generation. A run only commits its outcome
    if its generation is still the slot's latest, so an older call finishing
    late never overwrites a newer one.
    """

    def __init__(
        self,
        ctx: AppContext,
        strict_counts: bool = STRICT_RESULT_COUNTS,
        max_attempts: int = MAX_ATTEMPTS,
    ):
        self.ctx = ctx
        self.strict_counts = strict_counts
        self.max_attempts = max_attempts

    def state(self, kind: OperationKind) -> OperationState:
        return self.ctx.slots[kind]

    def _commit(self, outcome: OperationState) -> OperationState:
        current = self.ctx.slots[outcome.kind]
        if current.generation != outcome.generation:
            logger.info(
                "stale_result_discarded kind=%s generation=%s latest=%s",
                outcome.kind.value,
                outcome.generation,
                current.generation,
            )
            return current
        self.ctx.slots[outcome.kind] = outcome
        return outcome

    async def run(self, kind: OperationKind, text: str) -> OperationState:
        credential = await self.ctx.current_credential()
        # Raises ValidationError before anything changes: blank input or no key.
        request = BUILDERS[kind](text, credential)

        started = self.ctx.slots[kind].in_flight(subject=text.strip())
        self.ctx.slots[kind] = started
        logger.info("operation_started kind=%s generation=%s", kind.value, started.generation)

        configurable: Dict[str, Any] = {
            "executor": self.ctx.executor,
            "max_attempts": self.max_attempts,
            "strict_counts": self.strict_counts,
        }
        try:
            final = await pipeline.ainvoke(
                {"request": request, "credential": credential},
                config={"configurable": configurable},
            )
        except Exception as e:
            self._commit(started.failed(f"Unexpected error: {e!r}", type(e).__name__))
            raise

        if final.get("error"):
            logger.info("operation_failed kind=%s generation=%s", kind.value, started.generation)
            return self._commit(started.failed(final["error"], final.get("error_type")))

        logger.info("operation_succeeded kind=%s generation=%s", kind.value, started.generation)
        return self._commit(started.succeeded(final["result"]))

    async def generate_titles(self, destination: str) -> OperationState:
        return await self.run(OperationKind.TITLES, destination)

    async def recommend_cities(self, theme: str) -> OperationState:
        return await self.run(OperationKind.RECOMMENDATIONS, theme)

    async def generate_titles_for_recommendation(self, index: int) -> OperationState:
        recs = self.state(OperationKind.RECOMMENDATIONS)
        if recs.status is not OperationStatus.SUCCEEDED or not isinstance(recs.payload, list):
            raise ValidationError("There are no recommendations to pick from yet.")
        if not 0 <= index < len(recs.payload):
            raise ValidationError(f"No recommended destination at position {index}.")
        return await self.generate_titles(recs.payload[index])
