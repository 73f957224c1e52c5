import copy
from typing import Any, Dict, Iterable, List, Optional, Union

from .base import PromptCompletionClient, Tokenizer
from .types import ClientCall, CompletionOptions, Message, PromptResponse, PromptResponseStatus

ScriptedResponse = Union[PromptResponse, Message, str]


class StubCompletionClient(PromptCompletionClient):
    """
    Deterministic fake client for testing and CI.

    Returns the same status and message on every call. Status and response
    are plain attributes so tests can flip them between calls.
    """

    def __init__(
        self,
        status: PromptResponseStatus = "success",
        response: Union[Message, str, None] = None,
    ):
        """
        Args:
            status: Status returned by every call (default "success")
            response: Message returned by every call (default assistant "Hello World")
        """
        self.status = status
        self.response = response if response is not None else Message(role="assistant", content="Hello World")
        self.call_count = 0

    def complete_prompt(
        self,
        memory: Any,
        functions: Optional[Dict[str, Any]],
        tokenizer: Optional[Tokenizer],
        prompt: Any,
        options: Optional[CompletionOptions],
    ) -> PromptResponse:
        self.call_count += 1
        # Fresh copy so the caller can rewrite content without touching our template
        message = copy.deepcopy(self.response)
        if self.status != "success":
            return PromptResponse(
                status=self.status,
                message=message,
                error=message if isinstance(message, str) else None,
                metadata={"backend": "stub"},
            )
        return PromptResponse(status="success", message=message, metadata={"backend": "stub"})


class ScriptedCompletionClient(PromptCompletionClient):
    """
    Replays a queue of responses, one per call, and records every call.

    Queue entries may be full PromptResponse objects (any status), Message
    objects or plain strings (both returned as "success"). Once the queue
    is exhausted every call returns status "error".
    """

    def __init__(
        self,
        responses: Iterable[ScriptedResponse],
        input_variable: Optional[str] = "input",
        history_variable: Optional[str] = "history",
    ):
        self._responses: List[ScriptedResponse] = list(responses)
        self.input_variable = input_variable
        self.history_variable = history_variable
        self.calls: List[ClientCall] = []

    @property
    def remaining(self) -> int:
        """Number of queued responses not yet served."""
        return len(self._responses)

    def complete_prompt(
        self,
        memory: Any,
        functions: Optional[Dict[str, Any]],
        tokenizer: Optional[Tokenizer],
        prompt: Any,
        options: Optional[CompletionOptions],
    ) -> PromptResponse:
        self.calls.append(
            ClientCall(
                memory=memory,
                prompt=prompt,
                options=options,
                input=self._snapshot(memory, self.input_variable, None),
                history=self._snapshot(memory, self.history_variable, []) or [],
            )
        )

        if not self._responses:
            return PromptResponse(
                status="error",
                error="Scripted client has no more responses",
                metadata={"backend": "scripted"},
            )

        scripted = self._responses.pop(0)
        if isinstance(scripted, PromptResponse):
            return copy.deepcopy(scripted)
        return PromptResponse(
            status="success",
            message=copy.deepcopy(scripted),
            prompt=prompt,
            metadata={"backend": "scripted"},
        )

    @staticmethod
    def _snapshot(memory: Any, variable: Optional[str], default: Any) -> Any:
        if not variable or not memory.has(variable):
            return default
        return copy.deepcopy(memory.get(variable))
