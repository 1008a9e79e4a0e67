"""
Outline generator backed by Gemini with Google Search grounding.

The AutoGen chat client speaks Gemini's OpenAI-compatible endpoint, which does
not expose grounding metadata, so this collaborator talks to the native
google-genai SDK instead.
"""

from __future__ import annotations

import logging
import os
from typing import Any, Optional

from google import genai
from google.genai import types

from domain.errors import RemoteCallError
from proposal_state_manager import OutlineResponse, extract_citations

from .proposal_prompts import OUTLINE_SYSTEM_INSTRUCTION
from .summarizer_agent import DEFAULT_MODEL_NAME, gemini_api_key

logger = logging.getLogger(__name__)


class OutlineGenerator:
    """Requests a JSON proposal outline for a cleaned project description."""

    def __init__(
        self,
        *,
        model_name: Optional[str] = None,
        api_key: Optional[str] = None,
        client: Optional[Any] = None,
    ) -> None:
        self._model_name = model_name or os.getenv("GEMINI_MODEL_NAME", DEFAULT_MODEL_NAME)
        self._api_key = api_key
        self._client = client

    async def generate(self, cleaned_description: str) -> OutlineResponse:
        """Return the raw outline text and any grounding citations.

        The text is not parsed here; callers are expected to tolerate fences
        and reject malformed payloads.
        """

        if self._client is not None:
            return await self._generate(self._client, cleaned_description)

        # A fresh client per call: its connection pool is bound to the running event loop.
        client = genai.Client(api_key=self._api_key or gemini_api_key())
        try:
            return await self._generate(client, cleaned_description)
        finally:
            await client.aio.aclose()

    async def _generate(self, client: Any, cleaned_description: str) -> OutlineResponse:
        logger.info("Requesting grounded outline from model '%s'", self._model_name)
        response = await client.aio.models.generate_content(
            model=self._model_name,
            contents=[types.Content(role="user", parts=[types.Part(text=cleaned_description)])],
            config=types.GenerateContentConfig(
                system_instruction=OUTLINE_SYSTEM_INSTRUCTION,
                tools=[types.Tool(google_search=types.GoogleSearch())],
            ),
        )
        text = getattr(response, "text", None)
        if not text or not text.strip():
            raise RemoteCallError("The model returned an empty outline.")
        citations = extract_citations(response)
        logger.info("Outline raw output (%d citations): %s", len(citations), text)
        return OutlineResponse(text=text, citations=citations)
