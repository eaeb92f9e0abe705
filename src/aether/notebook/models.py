"""Data models for the notebook.

All models are frozen: a change to a cell, experiment or message produces a
new instance, and owners replace whole sequences rather than editing them.
"""

import uuid
from datetime import datetime
from enum import Enum
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field


def new_cell_id() -> str:
    """Collision-resistant cell identifier."""
    return uuid.uuid4().hex


def new_experiment_id() -> str:
    return f"exp-{uuid.uuid4().hex[:12]}"


class CellType(str, Enum):
    """Kind of notebook cell."""

    CODE = "code"
    MARKDOWN = "markdown"


class NotExecuted(BaseModel):
    """The cell has never produced output."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["not_executed"] = "not_executed"


class Executed(BaseModel):
    """The cell holds the output of its most recent completed execution."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["executed"] = "executed"
    text: str


CellResult = Annotated[NotExecuted | Executed, Field(discriminator="kind")]


class Cell(BaseModel):
    """A unit of notebook content, either executable code or static prose.

    Attributes:
        id: Unique identifier
        type: Code or markdown
        content: Source text
        result: NotExecuted, or Executed with the latest output
        is_executing: True only while an execution request is outstanding
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=new_cell_id)
    type: CellType
    content: str = ""
    result: CellResult = Field(default_factory=NotExecuted)
    is_executing: bool = False

    @property
    def output(self) -> str | None:
        """Latest output text, or None if the cell was never executed."""
        if isinstance(self.result, Executed):
            return self.result.text
        return None


class ExperimentStatus(str, Enum):
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"


class ExperimentMetrics(BaseModel):
    """Tracked metrics of a training run."""

    model_config = ConfigDict(frozen=True)

    accuracy: float = Field(ge=0.0, le=1.0)
    loss: float = Field(ge=0.0)
    epoch: int = Field(ge=0)


class Experiment(BaseModel):
    """A tracked training run."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=new_experiment_id)
    name: str
    status: ExperimentStatus
    metrics: ExperimentMetrics
    timestamp: datetime = Field(default_factory=datetime.now)


class Role(str, Enum):
    """Author of an assistant transcript entry."""

    USER = "user"
    AI = "ai"


class AssistantMessage(BaseModel):
    """One entry in the assistant transcript."""

    model_config = ConfigDict(frozen=True)

    role: Role
    text: str
    timestamp: datetime = Field(default_factory=datetime.now)


class View(str, Enum):
    """Application view the user is looking at."""

    NOTEBOOK = "notebook"
    MODELS = "models"
    DATASETS = "datasets"
    EXPERIMENTS = "experiments"
    API = "api"


class ExecutionStarted(BaseModel):
    """Delivered to the cell store when a request for the cell goes out."""

    model_config = ConfigDict(frozen=True)

    cell_id: str


class ExecutionCompleted(BaseModel):
    """Delivered to the cell store when a request for the cell settles."""

    model_config = ConfigDict(frozen=True)

    cell_id: str
    output: str


ExecutionMessage = ExecutionStarted | ExecutionCompleted


class NotebookSnapshot(BaseModel):
    """Immutable view of the whole application state at one instant."""

    model_config = ConfigDict(frozen=True)

    cells: tuple[Cell, ...] = ()
    experiments: tuple[Experiment, ...] = ()
    transcript: tuple[AssistantMessage, ...] = ()
    view: View = View.NOTEBOOK
    pending_input: str = ""
