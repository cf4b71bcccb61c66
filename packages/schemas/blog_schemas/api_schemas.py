from __future__ import annotations
from pydantic import BaseModel, Field

# Request bodies accept blank text on purpose: the service answers blank
# input with its own validation error instead of a schema error.


class TitlesIn(BaseModel):
    destination: str = Field(..., max_length=200)


class RecommendationsIn(BaseModel):
    theme: str = Field(..., max_length=500)


class CredentialIn(BaseModel):
    api_key: str = Field(..., max_length=512)


class CredentialOut(BaseModel):
    configured: bool


class HealthOut(BaseModel):
    ok: bool
    service: str
    redis: bool
