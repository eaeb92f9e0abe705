"""Starter content shown when the studio opens."""

from datetime import datetime, timedelta

from .models import Cell, CellType, Experiment, ExperimentMetrics, ExperimentStatus

WELCOME_MARKDOWN = "# Welcome to Aether Studio\n\nInitialize your training environment below."

CUDA_CHECK_CODE = (
    "import torch\n"
    "import numpy as np\n"
    "\n"
    'print(f"CUDA Available: {torch.cuda.is_available()}")\n'
    'print(f"Device Name: {torch.cuda.get_device_name(0) if torch.cuda.is_available() else "CPU"}")'
)


def sample_cells() -> list[Cell]:
    return [
        Cell(type=CellType.MARKDOWN, content=WELCOME_MARKDOWN),
        Cell(type=CellType.CODE, content=CUDA_CHECK_CODE),
    ]


def sample_experiments() -> list[Experiment]:
    """Seed runs for the experiments view."""
    now = datetime.now()
    return [
        Experiment(
            name="Baseline ResNet",
            status=ExperimentStatus.COMPLETED,
            metrics=ExperimentMetrics(accuracy=0.92, loss=0.21, epoch=50),
            timestamp=now - timedelta(hours=1),
        ),
        Experiment(
            name="Llama Finetune - V1",
            status=ExperimentStatus.RUNNING,
            metrics=ExperimentMetrics(accuracy=0.78, loss=0.45, epoch=12),
            timestamp=now,
        ),
    ]
