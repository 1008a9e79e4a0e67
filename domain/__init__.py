"""Domain types for the proposal outline workflow."""

from .errors import EmptyDescriptionError, OutlineFormatError, ProposalError, RemoteCallError  # noqa: F401
from .outline import ProposalOutline, parse_outline, strip_code_fence  # noqa: F401

__all__ = [
    "EmptyDescriptionError",
    "OutlineFormatError",
    "ProposalError",
    "ProposalOutline",
    "RemoteCallError",
    "parse_outline",
    "strip_code_fence",
]
