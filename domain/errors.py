"""Errors raised while turning a project description into a proposal outline."""

from __future__ import annotations

from typing import Optional


EMPTY_DESCRIPTION_MESSAGE = "Please paste a project description first."
INVALID_FORMAT_MESSAGE = "The AI returned an invalid format. Please try again."


class ProposalError(RuntimeError):
    """Base class for failures surfaced to the user."""


class EmptyDescriptionError(ProposalError, ValueError):
    """Raised when the description is empty after trimming."""

    def __init__(self, message: str = EMPTY_DESCRIPTION_MESSAGE) -> None:
        super().__init__(message)


class RemoteCallError(ProposalError):
    """Raised when the model call completes without usable content."""


class OutlineFormatError(ProposalError, ValueError):
    """Raised when the outline text cannot be parsed as a JSON object."""

    def __init__(self, *, raw_text: Optional[str] = None, message: str = INVALID_FORMAT_MESSAGE) -> None:
        super().__init__(message)
        self.raw_text = raw_text
