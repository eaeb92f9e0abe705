"""External inference boundary.

Hides how notebook operations are phrased as completion requests and how
remote failures are turned into inline text.
"""

from .base import InferenceClient
from .client import (
    ASSISTANT_EMPTY_REPLY,
    ASSISTANT_UNAVAILABLE,
    EXECUTION_EMPTY_OUTPUT,
    EXECUTION_FAILED,
    EXECUTION_TEMPERATURE,
    LLMInferenceClient,
)

__all__ = [
    "ASSISTANT_EMPTY_REPLY",
    "ASSISTANT_UNAVAILABLE",
    "EXECUTION_EMPTY_OUTPUT",
    "EXECUTION_FAILED",
    "EXECUTION_TEMPERATURE",
    "InferenceClient",
    "LLMInferenceClient",
]
