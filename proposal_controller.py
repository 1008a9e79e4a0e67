"""
Controller for the two-stage proposal outline pipeline.

One call to ``handle_generate`` cleans the description, asks for a grounded
outline, parses it and hands the result to the renderer. Every failure is
converted into a single rendered error message.
"""

from __future__ import annotations

import logging
from typing import Optional, Protocol

from domain.errors import EmptyDescriptionError
from domain.outline import parse_outline
from proposal_renderer import ResultsRenderer
from proposal_state_manager import OutlineResponse, ProposalContext

logger = logging.getLogger(__name__)

CLEANING_MESSAGE = "Cleaning project description..."
RESEARCHING_MESSAGE = "Researching latest AI solutions..."
UNKNOWN_ERROR_MESSAGE = "An unknown error occurred."


class DescriptionSummarizer(Protocol):
    async def summarize(self, project_description: str) -> str: ...


class OutlineSource(Protocol):
    async def generate(self, cleaned_description: str) -> OutlineResponse: ...


def normalize_description(description: Optional[str]) -> str:
    project_description = (description or "").strip()
    if not project_description:
        raise EmptyDescriptionError()
    return project_description


def describe_error(exc: BaseException) -> str:
    message = str(exc).strip()
    return message or UNKNOWN_ERROR_MESSAGE


class ProposalController:
    """Runs at most one outline generation at a time."""

    def __init__(
        self,
        *,
        summarizer: DescriptionSummarizer,
        outline_generator: OutlineSource,
        renderer: ResultsRenderer,
        context: Optional[ProposalContext] = None,
    ) -> None:
        self._summarizer = summarizer
        self._outline_generator = outline_generator
        self._renderer = renderer
        self._context = context or ProposalContext()

    @property
    def busy(self) -> bool:
        return self._context.busy

    @property
    def renderer(self) -> ResultsRenderer:
        return self._renderer

    async def handle_generate(self, description: Optional[str]) -> None:
        # Checked before the first await so overlapping triggers are dropped.
        if self._context.busy:
            logger.info("Generation already in flight; ignoring trigger.")
            return

        try:
            project_description = normalize_description(description)
        except EmptyDescriptionError as exc:
            self._renderer.render_error(str(exc))
            return

        with self._context.in_flight():
            self._renderer.set_loading(True, CLEANING_MESSAGE)
            try:
                await self._run_pipeline(project_description)
            except Exception as exc:
                logger.exception("Error generating proposal outline: %s", exc)
                self._renderer.render_error(
                    f"An error occurred while generating the outline: {describe_error(exc)}"
                )
            finally:
                self._renderer.set_loading(False)

    async def _run_pipeline(self, project_description: str) -> None:
        cleaned_description = await self._summarizer.summarize(project_description)

        self._renderer.set_loading(True, RESEARCHING_MESSAGE)
        response = await self._outline_generator.generate(cleaned_description)

        outline = parse_outline(response.text)
        if outline.is_empty:
            logger.warning("Outline parsed but carries no renderable fields: %s", response.text)
        logger.info(
            "Parsed outline: %d pain points, %d technologies, %d citations",
            len(outline.pain_points),
            len(outline.recommended_tech),
            len(response.citations),
        )
        self._renderer.render_results(outline, response.citations or [])
