"""
State models supporting the proposal outline workflow.
"""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Iterator, List, Mapping, Optional


def _field(source: Any, name: str) -> Any:
    if source is None:
        return None
    if isinstance(source, Mapping):
        return source.get(name)
    return getattr(source, name, None)


@dataclass(slots=True, frozen=True)
class GroundingCitation:
    """A web source attached to a search-grounded model response."""

    uri: Optional[str] = None
    title: Optional[str] = None

    @classmethod
    def from_chunk(cls, chunk: Any) -> Optional["GroundingCitation"]:
        """Build a citation from a grounding chunk (SDK object or plain dict)."""

        web = _field(chunk, "web")
        if web is None:
            return None
        uri = _field(web, "uri")
        title = _field(web, "title")
        return cls(
            uri=uri if isinstance(uri, str) and uri.strip() else None,
            title=title if isinstance(title, str) and title.strip() else None,
        )

    @property
    def display_text(self) -> str:
        return self.title or self.uri or ""


@dataclass(slots=True)
class OutlineResponse:
    """Raw outline text plus the citations the model grounded it on."""

    text: str
    citations: List[GroundingCitation] = field(default_factory=list)


@dataclass(slots=True)
class ProposalContext:
    """Orchestration state owned by a single controller."""

    busy: bool = False

    @contextmanager
    def in_flight(self) -> Iterator["ProposalContext"]:
        """Hold the busy flag for the duration of one pipeline run."""

        self.busy = True
        try:
            yield self
        finally:
            self.busy = False


def extract_citations(response: Any) -> List[GroundingCitation]:
    """Return the web citations from the first candidate's grounding metadata."""

    candidates = _field(response, "candidates") or []
    if not candidates:
        return []
    metadata = _field(candidates[0], "grounding_metadata")
    chunks = _field(metadata, "grounding_chunks") or []
    citations: List[GroundingCitation] = []
    for chunk in chunks:
        citation = GroundingCitation.from_chunk(chunk)
        if citation is not None:
            citations.append(citation)
    return citations
