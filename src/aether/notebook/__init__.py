"""Notebook core: cells, simulated execution, experiments and assistant.

Module structure:
- models.py: immutable data structures and lifecycle messages
- cells.py: the ordered cell collection
- experiments.py: training-run detection and experiment records
- dispatcher.py: asynchronous execution of one cell
- assistant.py: assistant transcript and queries
- controller.py: single owner of the application state
- script.py: percent-format scripts as cell lists
"""

from .assistant import AssistantSession
from .cells import CellStore
from .controller import AUTOSAVE_MESSAGE, NotebookController
from .dispatcher import ExecutionDispatcher
from .experiments import (
    DERIVED_EXPERIMENT_NAME,
    ExperimentDeriver,
    mentions_training,
    new_training_experiment,
)
from .models import (
    AssistantMessage,
    Cell,
    CellType,
    Executed,
    ExecutionCompleted,
    ExecutionStarted,
    Experiment,
    ExperimentMetrics,
    ExperimentStatus,
    NotebookSnapshot,
    NotExecuted,
    Role,
    View,
)
from .script import parse_script

__all__ = [
    "AUTOSAVE_MESSAGE",
    "DERIVED_EXPERIMENT_NAME",
    "AssistantMessage",
    "AssistantSession",
    "Cell",
    "CellStore",
    "CellType",
    "Executed",
    "ExecutionCompleted",
    "ExecutionDispatcher",
    "ExecutionStarted",
    "Experiment",
    "ExperimentDeriver",
    "ExperimentMetrics",
    "ExperimentStatus",
    "NotExecuted",
    "NotebookController",
    "NotebookSnapshot",
    "Role",
    "View",
    "mentions_training",
    "new_training_experiment",
    "parse_script",
]
