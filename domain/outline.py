"""Proposal outline shape and the tolerant parser for model output."""

from __future__ import annotations

import json
import logging
import re
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .errors import OutlineFormatError

logger = logging.getLogger(__name__)

_FENCE_PATTERN = re.compile(r"^\s*```(?:json)?\s*|\s*```\s*$", re.IGNORECASE)


class ProposalOutline(BaseModel):
    """Structured outline returned by the outline generator.

    Every field is optional. A field with the wrong shape is treated as absent
    so that its section is omitted instead of failing the whole render.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    pain_points: List[str] = Field(default_factory=list, alias="painPoints")
    proposed_solution: Optional[str] = Field(default=None, alias="proposedSolution")
    recommended_tech: List[str] = Field(default_factory=list, alias="recommendedTech")

    @field_validator("pain_points", "recommended_tech", mode="before")
    @classmethod
    def _coerce_string_list(cls, value: Any) -> List[str]:
        if not isinstance(value, list):
            return []
        return [item.strip() for item in value if isinstance(item, str) and item.strip()]

    @field_validator("proposed_solution", mode="before")
    @classmethod
    def _coerce_solution(cls, value: Any) -> Optional[str]:
        if not isinstance(value, str) or not value.strip():
            return None
        return value.strip()

    @property
    def is_empty(self) -> bool:
        return not (self.pain_points or self.proposed_solution or self.recommended_tech)


def strip_code_fence(text: str) -> str:
    """Remove a leading ```json (or ```) fence and a trailing ``` fence."""

    return _FENCE_PATTERN.sub("", text or "").strip()


def parse_outline(text: str) -> ProposalOutline:
    """Parse model output into a ProposalOutline or raise OutlineFormatError."""

    cleaned = strip_code_fence(text)
    data = _load_json_object(cleaned)
    if data is None:
        logger.error("JSON parsing error. Raw text: %s", text)
        raise OutlineFormatError(raw_text=text)
    return ProposalOutline.model_validate(data)


def _load_json_object(text: str) -> Optional[dict]:
    try:
        data = json.loads(text)
    except json.JSONDecodeError:
        logger.debug("Outline text is not valid JSON: %.80s", text)
        data = _load_brace_span(text)
    return data if isinstance(data, dict) else None


def _load_brace_span(text: str) -> Any:
    # Prose around the object; try the outermost braces.
    start, end = text.find("{"), text.rfind("}")
    if not 0 <= start < end:
        return None
    try:
        return json.loads(text[start : end + 1])
    except json.JSONDecodeError:
        logger.debug("Outline brace span is not valid JSON either.")
        return None
