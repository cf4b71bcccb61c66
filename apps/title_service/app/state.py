# apps/title_service/app/state.py

from typing import Any, Optional, TypedDict

from blog_schemas.models import GenerationRequest


# The object threaded through the generation pipeline graph.
# Each node reads what it needs and returns only the keys it fills in.
class PipelineState(TypedDict, total=False):
    # Input state
    request: GenerationRequest
    credential: str

    # Intermediate state, populated by nodes
    envelope: Any
    text: str

    # Final output state
    result: Any

    # Centralized error handling
    error: Optional[str]
    error_type: Optional[str]
