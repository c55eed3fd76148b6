"""
Per-call generation state.

idle -> awaiting_response -> delivered | failed(kind). There is no retry
edge; a failed call stays failed and the user asks again.

Dependencies: docchat.core.exceptions
System role: Tracks one gateway call
"""

from enum import Enum

from docchat.core.exceptions import FailureKind


class GenerationState(str, Enum):
    """Lifecycle of a single answer-generation call."""

    IDLE = "idle"
    AWAITING_RESPONSE = "awaiting_response"
    DELIVERED = "delivered"
    FAILED = "failed"


class GenerationCall:
    """State holder for one question sent to the answer proxy."""

    def __init__(self) -> None:
        self.state = GenerationState.IDLE
        self.failure: FailureKind | None = None

    @property
    def is_terminal(self) -> bool:
        return self.state in (GenerationState.DELIVERED, GenerationState.FAILED)

    def start(self) -> None:
        """Move from idle to awaiting_response."""
        self._require(GenerationState.IDLE)
        self.state = GenerationState.AWAITING_RESPONSE

    def deliver(self) -> None:
        """Record a successful answer."""
        self._require(GenerationState.AWAITING_RESPONSE)
        self.state = GenerationState.DELIVERED

    def fail(self, kind: FailureKind) -> None:
        """Record a classified failure."""
        self._require(GenerationState.AWAITING_RESPONSE)
        self.state = GenerationState.FAILED
        self.failure = kind

    def _require(self, expected: GenerationState) -> None:
        if self.state is not expected:
            raise ValueError(
                f"Invalid generation transition from {self.state.value} "
                f"(expected {expected.value})"
            )
