from abc import ABC, abstractmethod

from ..tracing import Traceable


class InferenceClient(Traceable, ABC):
    """Abstract boundary to the remote completion service.

    Both operations are single attempts and never raise: any transport or
    service failure is replaced by a fixed human-readable string, so callers
    can always show the result inline.
    """

    @abstractmethod
    async def simulate_execution(self, content: str, cell_type: str) -> str:
        """Return emulated kernel output for the given cell content.

        Args:
            content: Cell source text
            cell_type: 'code' or 'markdown'

        Returns:
            Output text, including plausible error text for invalid code
        """

    @abstractmethod
    async def assistant_query(self, query: str, context: str | None = None) -> str:
        """Answer a free-form developer question.

        Args:
            query: The user's question, as typed
            context: Snapshot of the application state at ask time

        Returns:
            Answer text
        """

    async def close(self) -> None:
        """Release the underlying connection, if any."""
