"""
HTML rendering for proposal outlines.

Every string handed to the renderer originates from model output, so all of it
is escaped before it is placed in markup.
"""

from __future__ import annotations

import html
import logging
from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional, Sequence
from urllib.parse import urlparse

from domain.outline import ProposalOutline
from proposal_state_manager import GroundingCitation

logger = logging.getLogger(__name__)

DEFAULT_LOADING_MESSAGE = "Analyzing description and crafting your outline..."


def escape_html(unsafe: str) -> str:
    return html.escape(unsafe, quote=True)


@dataclass(slots=True)
class ResultsView:
    """What the page should currently show."""

    html: str = ""
    is_error: bool = False
    loading: bool = False
    loading_message: str = DEFAULT_LOADING_MESSAGE


ViewListener = Callable[[ResultsView], None]


class ResultsRenderer:
    """Owns the results region and loading indicator state."""

    def __init__(self, listener: Optional[ViewListener] = None) -> None:
        self.view = ResultsView()
        self._listener = listener

    def bind(self, listener: Optional[ViewListener]) -> None:
        """Attach the callback that redraws the page, and draw once."""
        self._listener = listener
        self._notify()

    def render_results(self, outline: ProposalOutline, citations: Sequence[GroundingCitation]) -> None:
        sections = [
            _list_section("Client's Pain Points", outline.pain_points, css_class="pain-points"),
            _solution_section(outline.proposed_solution),
            _list_section("Recommended Tech Stack", outline.recommended_tech, css_class="tech-stack"),
            _sources_section(citations),
        ]
        self.view.html = "\n".join(section for section in sections if section)
        self.view.is_error = False
        self._notify()

    def render_error(self, message: str) -> None:
        self.view.html = f"<p>{escape_html(message)}</p>"
        self.view.is_error = True
        self._notify()

    def set_loading(self, state: bool, message: str = DEFAULT_LOADING_MESSAGE) -> None:
        self.view.loading = state
        self.view.loading_message = message
        if state:
            self.view.html = ""
            self.view.is_error = False
        self._notify()

    def clear(self) -> None:
        self.view = ResultsView()
        self._notify()

    def _notify(self) -> None:
        if self._listener is not None:
            self._listener(self.view)


def _list_section(heading: str, items: Iterable[str], *, css_class: str) -> str:
    entries = [f"<li>{escape_html(item)}</li>" for item in items]
    if not entries:
        return ""
    return (
        f'<div class="result-section {css_class}">'
        f"<h2>{escape_html(heading)}</h2>"
        f"<ul>{''.join(entries)}</ul>"
        "</div>"
    )


def _solution_section(solution: Optional[str]) -> str:
    if not solution:
        return ""
    return (
        '<div class="result-section proposed-solution">'
        "<h2>Proposed Solution</h2>"
        f"<p>{escape_html(solution)}</p>"
        "</div>"
    )


def _sources_section(citations: Sequence[GroundingCitation]) -> str:
    links: List[str] = [_citation_item(c) for c in citations if c.uri]
    if not links:
        return ""
    return (
        '<div class="result-section sources-section">'
        "<h2>Sources</h2>"
        "<p>This outline was generated using information from the following sources:</p>"
        f"<ul>{''.join(links)}</ul>"
        "</div>"
    )


def _citation_item(citation: GroundingCitation) -> str:
    text = escape_html(citation.display_text)
    if urlparse(citation.uri).scheme.lower() not in {"http", "https"}:
        logger.warning("Skipping link for non-web citation URI: %s", citation.uri)
        return f"<li>{text}</li>"
    href = escape_html(citation.uri)
    return f'<li><a href="{href}" target="_blank" rel="noopener noreferrer">{text}</a></li>'
