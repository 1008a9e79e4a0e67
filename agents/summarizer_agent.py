"""Summarizer: condenses a raw project description to its core requirements."""

from __future__ import annotations

import logging
import os
from typing import Any, Iterable, Optional

from autogen_agentchat.agents import AssistantAgent
from autogen_agentchat.messages import BaseChatMessage
from autogen_core import CancellationToken
from autogen_core.models import ChatCompletionClient, ModelInfo
from autogen_ext.models.openai import OpenAIChatCompletionClient

from domain.errors import RemoteCallError

from .proposal_prompts import SUMMARIZER_SYSTEM_PROMPT, summarize_prompt

logger = logging.getLogger(__name__)

DEFAULT_MODEL_NAME = "gemini-2.5-flash"
GEMINI_OPENAI_BASE_URL = "https://generativelanguage.googleapis.com/v1beta/openai/"


def gemini_api_key() -> Optional[str]:
    return os.getenv("GEMINI_API_KEY") or os.getenv("API_KEY")


class Summarizer:
    """Strips boilerplate from a project description using a low-temperature model call."""

    def __init__(
        self,
        *,
        model_name: Optional[str] = None,
        temperature: float = 0.2,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        assistant: Optional[AssistantAgent] = None,
    ) -> None:
        self._model_name = model_name or os.getenv("GEMINI_MODEL_NAME", DEFAULT_MODEL_NAME)
        self._temperature = temperature
        self._api_key = api_key
        self._base_url = base_url
        self._assistant = assistant

    async def summarize(self, project_description: str) -> str:
        prompt = summarize_prompt(project_description=project_description)
        logger.info("Summarizer cleaning description (%d chars)", len(project_description))
        if self._assistant is not None:
            await self._assistant.on_reset(CancellationToken())
            return await self._run(self._assistant, prompt)

        # A fresh client per call: its connection pool is bound to the running event loop.
        model_client = self._build_gemini_client(
            model_name=self._model_name,
            temperature=self._temperature,
            api_key=self._api_key or gemini_api_key(),
            base_url=self._base_url,
        )
        try:
            return await self._run(self._build_assistant(model_client), prompt)
        finally:
            await model_client.close()

    async def _run(self, assistant: AssistantAgent, prompt: str) -> str:
        result = await assistant.run(task=prompt)
        cleaned = self._extract_text(result.messages, preferred_source=assistant.name)
        if not cleaned:
            raise RemoteCallError("The model returned an empty summary.")
        logger.info("Summarizer output: %s", cleaned)
        return cleaned

    @staticmethod
    def _build_assistant(model_client: ChatCompletionClient) -> AssistantAgent:
        return AssistantAgent(
            name="description_cleaner",
            model_client=model_client,
            system_message=SUMMARIZER_SYSTEM_PROMPT,
            description="Condenses project postings into core requirements.",
        )

    def _extract_text(self, messages: Iterable[Any], preferred_source: Optional[str]) -> str:
        final_message = self._last_chat_message(messages, preferred_source=preferred_source)
        return final_message.to_text().strip()

    @staticmethod
    def _last_chat_message(messages: Iterable[Any], preferred_source: Optional[str] = None) -> BaseChatMessage:
        candidate: Optional[BaseChatMessage] = None
        for message in reversed(list(messages)):
            if not isinstance(message, BaseChatMessage):
                continue
            if preferred_source and getattr(message, "source", None) == preferred_source:
                return message
            if candidate is None:
                candidate = message
        if candidate:
            return candidate
        raise RemoteCallError("Summarizer did not produce a chat response.")

    @staticmethod
    def _build_gemini_client(
        *,
        model_name: str,
        temperature: Optional[float],
        api_key: Optional[str],
        base_url: Optional[str] = None,
    ) -> ChatCompletionClient:
        model_info: ModelInfo = {
            "vision": False,
            "function_calling": False,
            "json_output": False,
            "structured_output": False,
            "family": "gemini-2.5-flash",
        }
        client_kwargs = {
            "model": model_name,
            "api_key": api_key,
            "base_url": base_url or os.getenv("GEMINI_OPENAI_BASE_URL", GEMINI_OPENAI_BASE_URL),
            "include_name_in_message": False,
            "model_info": model_info,
        }
        if temperature is not None:
            client_kwargs["temperature"] = temperature
        return OpenAIChatCompletionClient(**client_kwargs)
