"""Inference client backed by an LLM provider.

Each operation sends one request: a fixed system instruction from the
prompt files plus the user or cell text. Errors never leave this module.
"""

from ..llm import ChatMessage, LLMProvider
from ..prompts import get_assistant_prompt, get_kernel_prompt
from .base import InferenceClient

EXECUTION_TEMPERATURE = 0.2
EXECUTION_REQUEST_TEMPLATE = "Execute this code and provide the output:\n\n{code}"

EXECUTION_EMPTY_OUTPUT = "Execution finished with no output."
EXECUTION_FAILED = "Error: Could not simulate execution. Check your connectivity."
ASSISTANT_EMPTY_REPLY = "I'm sorry, I couldn't process that request."
ASSISTANT_UNAVAILABLE = "The assistant is currently unavailable."


class LLMInferenceClient(InferenceClient):
    """ExternalInferenceClient implemented over any LLMProvider.

    Execution and assistant requests may target different models: kernel
    simulation benefits from a stronger model, the assistant from a fast one.
    """

    def __init__(
        self,
        llm: LLMProvider,
        execution_model: str | None = None,
        assistant_model: str | None = None,
        assistant_temperature: float | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            llm: Provider that performs the completions
            execution_model: Model for simulate_execution (None uses provider default)
            assistant_model: Model for assistant_query (None uses provider default)
            assistant_temperature: Sampling temperature for assistant answers
                (None leaves the service default)
        """
        self._llm = llm
        self._execution_model = execution_model
        self._assistant_model = assistant_model
        self._assistant_temperature = assistant_temperature

    @property
    def llm(self) -> LLMProvider:
        return self._llm

    async def simulate_execution(self, content: str, cell_type: str) -> str:
        if cell_type == "markdown":
            return ""

        self._debug("debug", "LLM", f"Simulating execution ({len(content)} chars)")

        try:
            messages = [
                ChatMessage(role="system", content=get_kernel_prompt()),
                ChatMessage(role="user", content=EXECUTION_REQUEST_TEMPLATE.format(code=content)),
            ]
            response = await self._llm.chat_completion(
                messages,
                model=self._execution_model,
                temperature=EXECUTION_TEMPERATURE,
            )
        except Exception as e:
            self._debug("error", "LLM", f"Execution simulation failed: {e}")
            return EXECUTION_FAILED

        self._debug("debug", "LLM", f"Execution output from {response.model}: {len(response.content)} chars")
        return response.content or EXECUTION_EMPTY_OUTPUT

    async def assistant_query(self, query: str, context: str | None = None) -> str:
        self._debug("debug", "LLM", f"Assistant query with context: {context or 'None'}")

        try:
            messages = [
                ChatMessage(role="system", content=get_assistant_prompt(context)),
                ChatMessage(role="user", content=query),
            ]
            response = await self._llm.chat_completion(
                messages,
                model=self._assistant_model,
                temperature=self._assistant_temperature,
            )
        except Exception as e:
            self._debug("error", "LLM", f"Assistant query failed: {e}")
            return ASSISTANT_UNAVAILABLE

        return response.content or ASSISTANT_EMPTY_REPLY

    async def close(self) -> None:
        await self._llm.close()
