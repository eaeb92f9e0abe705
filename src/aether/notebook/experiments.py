"""Experiment records derived from executed cell content.

Whether content counts as a training run is decided by a pure predicate,
kept apart from the dispatch path so it can be tested on its own.
"""

from collections.abc import Iterable

from ..tracing import Traceable
from .models import Experiment, ExperimentMetrics, ExperimentStatus

TRAINING_KEYWORD = "train"
DERIVED_EXPERIMENT_NAME = "Manual Training Session"


def mentions_training(content: str) -> bool:
    """Case-insensitive check for the training keyword anywhere in content."""
    return TRAINING_KEYWORD in content.lower()


def new_training_experiment() -> Experiment:
    """A freshly started run with zeroed progress."""
    return Experiment(
        name=DERIVED_EXPERIMENT_NAME,
        status=ExperimentStatus.RUNNING,
        metrics=ExperimentMetrics(accuracy=0.0, loss=1.0, epoch=0),
    )


class ExperimentDeriver(Traceable):
    """Holds the experiment sequence, most recent first.

    Every qualifying execution adds an independent record; records are never
    de-duplicated and never advanced after creation.
    """

    def __init__(self, experiments: Iterable[Experiment] = ()) -> None:
        self._experiments: tuple[Experiment, ...] = tuple(experiments)

    @property
    def experiments(self) -> tuple[Experiment, ...]:
        return self._experiments

    def __len__(self) -> int:
        return len(self._experiments)

    def maybe_derive(self, content: str) -> Experiment | None:
        """Prepend a new running experiment if content mentions training.

        Returns:
            The new experiment, or None if content did not qualify
        """
        if not mentions_training(content):
            return None

        experiment = new_training_experiment()
        self._experiments = (experiment, *self._experiments)
        self._debug("info", "Experiments", f"Started '{experiment.name}' ({experiment.id})")
        return experiment
