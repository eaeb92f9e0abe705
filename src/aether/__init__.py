"""
Aether Studio: a research notebook with simulated cell execution.

Cells are "executed" by a remote inference service that emulates a Python
kernel. Executed content that looks like a training run is tracked as an
experiment, and an assistant answers developer questions about the notebook.

Each subpackage hides one design decision:
- llm: which chat-completion provider is used
- inference: how execution and assistant requests are phrased and recovered
- notebook: the cell lifecycle and the application state
- ui / cli: how users drive the notebook
"""

__version__ = "0.1.0"

from .inference import InferenceClient, LLMInferenceClient
from .notebook import (
    AssistantMessage,
    Cell,
    CellType,
    Experiment,
    NotebookController,
    View,
)

__all__ = [
    "AssistantMessage",
    "Cell",
    "CellType",
    "Experiment",
    "InferenceClient",
    "LLMInferenceClient",
    "NotebookController",
    "View",
]
