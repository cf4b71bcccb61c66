from __future__ import annotations

from typing import Optional


class TitleMakerError(Exception):
    """Base for every failure that ends an operation."""


class NetworkError(TitleMakerError):
    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class MalformedResponseError(TitleMakerError):
    pass


class ParseError(TitleMakerError):
    pass


class ValidationError(TitleMakerError):
    """Client-side guard: the request would fail upstream, so it is never sent."""

    def __init__(self, message: str, needs_credential: bool = False):
        super().__init__(message)
        self.needs_credential = needs_credential
