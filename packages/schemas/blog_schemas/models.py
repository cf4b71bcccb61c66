from __future__ import annotations
from enum import Enum
from typing import Any, List, Literal, Optional, Union
from pydantic import BaseModel, ConfigDict, Field, model_validator

SEARCH_TOOL = {"google_search": {}}
JSON_MIME_TYPE = "application/json"


class OperationKind(str, Enum):
    TITLES = "titles"
    RECOMMENDATIONS = "recommendations"


class ResponseFormat(str, Enum):
    NONE = "none"
    JSON = "json"


class GenerationRequest(BaseModel):
    """
    One prompt for the generateContent endpoint.

    Structured-JSON response mode and the search tool cannot be combined
    upstream, so a request asking for both is rejected at construction.
    """
    model_config = ConfigDict(frozen=True)

    kind: OperationKind
    prompt_text: str = Field(..., min_length=1)
    system_instruction: str = Field(..., min_length=1)
    use_search_tool: bool = False
    response_format: ResponseFormat = ResponseFormat.NONE
    temperature: Optional[float] = Field(default=None, ge=0.0, le=2.0)

    @model_validator(mode="after")
    def _search_excludes_json_mode(self) -> "GenerationRequest":
        if self.use_search_tool and self.response_format is ResponseFormat.JSON:
            raise ValueError("search tool cannot be combined with JSON response mode")
        return self

    def to_payload(self) -> dict[str, Any]:
        generation_config: dict[str, Any] = {}
        if self.response_format is ResponseFormat.JSON:
            generation_config["responseMimeType"] = JSON_MIME_TYPE
        if self.temperature is not None:
            generation_config["temperature"] = self.temperature

        payload: dict[str, Any] = {
            "contents": [{"parts": [{"text": self.prompt_text}]}],
            "systemInstruction": {"parts": [{"text": self.system_instruction}]},
        }
        if self.use_search_tool:
            payload["tools"] = [SEARCH_TOOL]
        payload["generationConfig"] = generation_config
        return payload


class TitleSet(BaseModel):
    model_config = ConfigDict(extra="ignore")

    info: List[str]
    tips: List[str]
    hotspots: List[str]

    def categories(self) -> dict[str, List[str]]:
        return {"info": self.info, "tips": self.tips, "hotspots": self.hotspots}

    def total(self) -> int:
        return len(self.info) + len(self.tips) + len(self.hotspots)


CityRecommendationList = List[str]


class OperationStatus(str, Enum):
    IDLE = "idle"
    IN_FLIGHT = "in_flight"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class OperationState(BaseModel):
    """Snapshot of one operation slot. Replaced wholesale on every transition."""
    model_config = ConfigDict(frozen=True)

    kind: OperationKind
    status: OperationStatus = OperationStatus.IDLE
    generation: int = 0
    subject: Optional[str] = None
    payload: Optional[Union[TitleSet, List[str]]] = None
    message: Optional[str] = None
    error_type: Optional[str] = None

    @classmethod
    def idle(cls, kind: OperationKind) -> "OperationState":
        return cls(kind=kind)

    def in_flight(self, subject: str) -> "OperationState":
        return OperationState(
            kind=self.kind,
            status=OperationStatus.IN_FLIGHT,
            generation=self.generation + 1,
            subject=subject,
        )

    def succeeded(self, payload: Union[TitleSet, List[str]]) -> "OperationState":
        return self.model_copy(update={"status": OperationStatus.SUCCEEDED, "payload": payload})

    def failed(self, message: str, error_type: Optional[str] = None) -> "OperationState":
        return self.model_copy(
            update={"status": OperationStatus.FAILED, "message": message, "error_type": error_type}
        )


class ErrorBody(BaseModel):
    error: Literal["validation_error", "not_found", "conflict"]
    message: str
    needs_credential: bool = False
