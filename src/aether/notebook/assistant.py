"""Assistant chat session.

The user's message appears in the transcript as soon as it is asked; the
reply is appended when the remote call settles.
"""

import asyncio
from collections.abc import Callable

from ..inference import ASSISTANT_UNAVAILABLE, InferenceClient
from ..tracing import Traceable
from .models import AssistantMessage, Role

ContextProvider = Callable[[], str]


class AssistantSession(Traceable):
    """Owns the assistant transcript and the pending input buffer."""

    def __init__(
        self,
        client: InferenceClient,
        context_provider: ContextProvider | None = None,
    ) -> None:
        """Initialize the session.

        Args:
            client: Inference client answering queries
            context_provider: Called at ask time to describe the application state
        """
        self._client = client
        self._context_provider = context_provider
        self._transcript: tuple[AssistantMessage, ...] = ()
        self._pending_input = ""
        self._pending: set[asyncio.Task[str]] = set()

    @property
    def transcript(self) -> tuple[AssistantMessage, ...]:
        """Messages in chronological order."""
        return self._transcript

    @property
    def pending_input(self) -> str:
        """Text typed but not yet asked."""
        return self._pending_input

    @pending_input.setter
    def pending_input(self, value: str) -> None:
        self._pending_input = value

    def ask(self, query: str | None = None) -> asyncio.Task[str] | None:
        """Send a question to the assistant.

        Must be called from a running event loop. Returns immediately.

        Args:
            query: Question text; the pending input is used when omitted

        Returns:
            Task resolving to the reply, or None if the query was blank
        """
        text = self._pending_input if query is None else query
        if not text.strip():
            return None

        self._append(Role.USER, text)
        self._pending_input = ""
        context = self._context_provider() if self._context_provider else None
        self._debug("info", "Assistant", f"Asking: '{text[:50]}'")

        task = asyncio.get_running_loop().create_task(self._respond(text, context))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    async def drain(self) -> None:
        """Wait until every outstanding query has been answered."""
        while self._pending:
            await asyncio.gather(*self._pending)

    def clear(self) -> None:
        """Forget the transcript. Replies still in flight are appended later."""
        self._transcript = ()

    async def _respond(self, query: str, context: str | None) -> str:
        try:
            reply = await self._client.assistant_query(query, context)
        except Exception as e:
            self._debug("error", "Assistant", f"Assistant query failed: {e}")
            reply = ASSISTANT_UNAVAILABLE
        self._append(Role.AI, reply)
        return reply

    def _append(self, role: Role, text: str) -> None:
        self._transcript = (*self._transcript, AssistantMessage(role=role, text=text))
