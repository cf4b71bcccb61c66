# apps/title_service/app/nodes.py

from typing import Any, Dict

from langchain_core.runnables import RunnableConfig

from blog_schemas.models import OperationKind
from shared.logging import get_logger

from .config import MAX_ATTEMPTS, RECOMMENDATION_COUNT, STRICT_RESULT_COUNTS, TITLES_PER_CATEGORY, generate_content_url
from .errors import TitleMakerError
from .extractor import decode_envelope, extract
from .parser import PARSERS
from .state import PipelineState

logger = get_logger(__name__)

EXPECTED_COUNTS = {
    OperationKind.TITLES: TITLES_PER_CATEGORY,
    OperationKind.RECOMMENDATIONS: RECOMMENDATION_COUNT,
}


def _fail(stage: str, e: TitleMakerError) -> Dict[str, Any]:
    logger.warning("pipeline_stage_failed stage=%s type=%s err=%s", stage, type(e).__name__, e)
    return {"error": str(e), "error_type": type(e).__name__}


async def call_upstream(state: PipelineState, config: RunnableConfig) -> Dict[str, Any]:
    """POSTs the request body, retrying transient failures, and decodes the envelope."""
    executor = config["configurable"]["executor"]
    request = state["request"]
    try:
        resp = await executor.execute(
            generate_content_url(),
            request.to_payload(),
            max_attempts=config["configurable"].get("max_attempts", MAX_ATTEMPTS),
            params={"key": state["credential"]},
        )
        return {"envelope": decode_envelope(resp)}
    except TitleMakerError as e:
        return _fail("call_upstream", e)


async def extract_text(state: PipelineState) -> Dict[str, Any]:
    try:
        return {"text": extract(state["envelope"])}
    except TitleMakerError as e:
        return _fail("extract_text", e)


async def parse_result(state: PipelineState, config: RunnableConfig) -> Dict[str, Any]:
    kind = state["request"].kind
    strict = config["configurable"].get("strict_counts", STRICT_RESULT_COUNTS)
    try:
        result = PARSERS[kind](state["text"], EXPECTED_COUNTS[kind] if strict else None)
        return {"result": result}
    except TitleMakerError as e:
        return _fail("parse_result", e)
