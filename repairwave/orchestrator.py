"""
Completion orchestrator.

Sends a prompt to a completion client, validates what comes back and, when
validation fails, re-prompts the client with corrective feedback until the
output passes or the repair budget runs out.

Invariants:
- Only confirmed-good turns reach the real conversation history
- Repairs run against a ConversationHistoryFork; a failed repair leaves the
  caller's memory exactly as it was
- Backend failures (error, rate_limited, too_long, cancelled) are returned
  untouched and never trigger a repair
- Nothing raises across complete_prompt(); every exit is a status
"""

import json
import logging
import time
from datetime import date, datetime
from typing import Any, Dict, Optional
from uuid import uuid4

from config import Config
from inference import (
    CompletionOptions,
    Message,
    PromptCompletionClient,
    PromptResponse,
    Tokenizer,
    normalize_response,
    render_value,
)
from repairwave.memory import ConversationHistoryFork, PromptMemory, VolatileMemory, append_to_history
from repairwave.tracing import TraceMetadata, Tracer, create_tracer
from repairwave.validation import DefaultResponseValidator, PromptResponseValidator, Validation

logger = logging.getLogger(__name__)

DEFAULT_REPAIR_FEEDBACK = "The response was invalid. Try another strategy."
LAST_ATTEMPT_SUFFIX = "\n\nThis is your last attempt to get it right. Think step by step before you answer."


class CompletionOrchestrator:
    """
    Completion / validation / repair state machine.

    One instance is configured once and can be called repeatedly; each call
    to complete_prompt() is a single sequential operation. Instances hold no
    locks: concurrent calls sharing one memory race on it like any shared map.
    """

    def __init__(
        self,
        client: PromptCompletionClient,
        prompt: Any,
        prompt_options: Optional[CompletionOptions] = None,
        memory: Optional[PromptMemory] = None,
        functions: Optional[Dict[str, Any]] = None,
        tokenizer: Optional[Tokenizer] = None,
        validator: Optional[PromptResponseValidator] = None,
        history_variable: Optional[str] = None,
        input_variable: Optional[str] = None,
        max_history_messages: Optional[int] = None,
        max_repair_attempts: Optional[int] = None,
        tracer: Optional[Tracer] = None,
        log_repairs: Optional[bool] = None,
        conversation_id: Optional[str] = None,
    ):
        """
        Initialize the orchestrator.

        Args:
            client: Completion client to call
            prompt: Prompt handed to the client (opaque to the orchestrator)
            prompt_options: Options forwarded to the client
            memory: Key/value memory holding history and input (VolatileMemory by default)
            functions: Auxiliary context forwarded to the client and validator
            tokenizer: Tokenizer forwarded to the client and validator
            validator: Acceptance policy (DefaultResponseValidator by default)
            history_variable: Memory slot for conversation history ("" disables history)
            input_variable: Memory slot for user input ("" disables the slot)
            max_history_messages: Sliding-window size of the history
            max_repair_attempts: Maximum number of repair calls per completion
            tracer: Passive lifecycle observer (selected by TRACER_BACKEND by default)
            log_repairs: Log repair progress at INFO level
            conversation_id: Optional id attached to trace metadata

        Unset arguments fall back to Config.
        """
        self.client = client
        self.prompt = prompt
        self.prompt_options = prompt_options or CompletionOptions(
            completion_type=Config.COMPLETION_TYPE,
            model=Config.MODEL,
        )
        self.memory = memory if memory is not None else VolatileMemory()
        self.functions = functions
        self.tokenizer = tokenizer
        self.validator = validator or DefaultResponseValidator()
        self.history_variable = history_variable if history_variable is not None else Config.HISTORY_VARIABLE
        self.input_variable = input_variable if input_variable is not None else Config.INPUT_VARIABLE
        self.max_history_messages = (
            max_history_messages if max_history_messages is not None else Config.MAX_HISTORY_MESSAGES
        )
        self.max_repair_attempts = (
            max_repair_attempts if max_repair_attempts is not None else Config.MAX_REPAIR_ATTEMPTS
        )
        self.tracer = tracer or create_tracer()
        self.log_repairs = log_repairs if log_repairs is not None else Config.LOG_REPAIRS
        self.conversation_id = conversation_id

    # ── Public API ───────────────────────────────────────────────────────────

    def complete_prompt(self, input: Optional[str] = None) -> PromptResponse:
        """
        Complete the prompt, repairing invalid output if needed.

        Args:
            input: User input. Written to the input slot when given; when
                   omitted the current slot value is used.

        Returns:
            PromptResponse. Only "success" guarantees a usable message;
            "invalid_response" means the repair budget ran out and history
            was left untouched.
        """
        memory = self.memory
        trace_metadata = TraceMetadata(trace_id=str(uuid4()), conversation_id=self.conversation_id)
        span = self._start_span("complete_prompt", {"memory": type(memory).__name__}, trace_metadata)

        try:
            input = self._resolve_input(input)
            response = self._call_client(memory, trace_metadata)
            if response.status != "success":
                self._end_span(span, response.status, {"error": response.error})
                return response

            validation = self._validate(memory, response, self.max_repair_attempts, trace_metadata)
            if validation.valid:
                self._apply_validation(response, validation)
                self._add_input_to_history(memory, input)
                self._add_response_to_history(memory, response.message)
                self._end_span(span, response.status, {})
                return response

            # Fork the history so the repair can show the model its own mistake
            fork = ConversationHistoryFork(memory, self.history_variable, self.input_variable)
            self._add_input_to_history(fork, input)
            self._add_response_to_history(fork, response.message)

            if self.log_repairs:
                logger.info(f"Repairing response: {response.text}")

            self._emit("before_repair", {"remaining_attempts": self.max_repair_attempts}, trace_metadata)
            repair = self._repair_response(fork, validation, self.max_repair_attempts, trace_metadata)
            self._emit("after_repair", {"status": repair.status}, trace_metadata)

            # Never save an invalid response to the real history; the caller
            # can take further corrective action, including simply retrying.
            if repair.status == "success":
                if self.log_repairs:
                    logger.info("Response repaired")
                repair.prompt = response.prompt
                self._add_input_to_history(memory, input)
                self._add_response_to_history(memory, repair.message)
            elif repair.status == "invalid_response":
                logger.warning(f"Response repair failed after {self.max_repair_attempts} attempt(s)")
            elif self.log_repairs:
                logger.info(f"Response repair aborted with status {repair.status}")

            self._end_span(span, repair.status, {})
            return repair

        except Exception as e:
            logger.error(f"Completion failed: {str(e)}", exc_info=True)
            self._end_span(span, "error", {"error": str(e)})
            return PromptResponse(status="error", message=str(e), error=str(e))

    def add_function_result_to_history(self, name: str, results: Any) -> None:
        """
        Append the result of a function call to the real history.

        Dates become ISO strings, dicts and lists become JSON, None becomes ""
        and anything else is converted with str().
        """
        if isinstance(results, (datetime, date)):
            content = results.isoformat()
        elif isinstance(results, (dict, list)):
            content = json.dumps(results)
        elif results is None:
            content = ""
        else:
            content = str(results)

        append_to_history(
            self.memory,
            self.history_variable,
            {"role": "function", "name": name, "content": content},
            self.max_history_messages,
        )

    # ── Repair loop ──────────────────────────────────────────────────────────

    def _repair_response(
        self,
        fork: ConversationHistoryFork,
        validation: Validation,
        remaining_attempts: int,
        trace_metadata: TraceMetadata,
    ) -> PromptResponse:
        """
        Re-prompt against the fork until a response validates or attempts run out.

        The exhaustion check always happens before another client call, and
        the last attempt gets a "final attempt" suffix on its feedback.
        """
        while True:
            if remaining_attempts <= 0:
                feedback = validation.feedback or DEFAULT_REPAIR_FEEDBACK
                return PromptResponse(status="invalid_response", message=feedback, error=feedback)

            feedback = validation.feedback or DEFAULT_REPAIR_FEEDBACK
            if remaining_attempts == 1:
                feedback += LAST_ATTEMPT_SUFFIX

            if self.log_repairs:
                logger.info(f"Repair feedback ({remaining_attempts} attempt(s) left): {feedback}")

            if self.input_variable:
                fork.set(self.input_variable, feedback)
            else:
                self._add_input_to_history(fork, feedback)

            response = self._call_client(fork, trace_metadata)
            if response.status != "success":
                return response

            validation = self._validate(fork, response, remaining_attempts, trace_metadata)
            if validation.valid:
                self._apply_validation(response, validation)
                return response

            remaining_attempts -= 1
            self._emit("next_repair", {"remaining_attempts": remaining_attempts}, trace_metadata)

    # ── Helpers ──────────────────────────────────────────────────────────────

    def _resolve_input(self, input: Optional[str]) -> str:
        if self.input_variable:
            if isinstance(input, str):
                self.memory.set(self.input_variable, input)
                return input
            value = self.memory.get(self.input_variable) if self.memory.has(self.input_variable) else None
            return value if isinstance(value, str) else ""
        return input or ""

    def _call_client(self, memory: PromptMemory, trace_metadata: TraceMetadata) -> PromptResponse:
        self._emit("before_prompt", {"memory": type(memory).__name__}, trace_metadata)
        started = time.monotonic()
        response = self.client.complete_prompt(
            memory, self.functions, self.tokenizer, self.prompt, self.prompt_options
        )
        duration_ms = round((time.monotonic() - started) * 1000, 3)
        self._emit(
            "after_prompt",
            {"status": response.status, "duration_ms": duration_ms, "memory": type(memory).__name__},
            trace_metadata,
        )
        return normalize_response(response)

    def _validate(
        self,
        memory: PromptMemory,
        response: PromptResponse,
        remaining_attempts: int,
        trace_metadata: TraceMetadata,
    ) -> Validation:
        self._emit("before_validation", {"remaining_attempts": remaining_attempts}, trace_metadata)
        validation = self.validator.validate_response(
            memory, self.functions, self.tokenizer, response, remaining_attempts
        )
        self._emit(
            "after_validation",
            {
                "remaining_attempts": remaining_attempts,
                "valid": validation.valid,
                "has_feedback": validation.feedback is not None,
                "has_value": validation.has_value,
            },
            trace_metadata,
        )
        return validation

    @staticmethod
    def _apply_validation(response: PromptResponse, validation: Validation) -> None:
        """Replace the message content with the validator's value, if it supplied one."""
        if validation.has_value and isinstance(response.message, Message):
            response.value = validation.value
            response.message.content = render_value(validation.value)

    def _add_input_to_history(self, memory: PromptMemory, input: str) -> None:
        if input:
            append_to_history(
                memory,
                self.history_variable,
                {"role": "user", "content": input},
                self.max_history_messages,
            )

    def _add_response_to_history(self, memory: PromptMemory, message: Any) -> None:
        if isinstance(message, Message):
            entry = message.to_dict()
        else:
            entry = {"role": "assistant", "content": message or ""}
        append_to_history(memory, self.history_variable, entry, self.max_history_messages)

    def _tracing_enabled(self) -> bool:
        try:
            return bool(self.tracer.is_enabled())
        except Exception as e:
            logger.debug(f"Tracer failed to report state: {e}")
            return False

    def _emit(self, name: str, metadata: Dict[str, Any], trace_metadata: TraceMetadata) -> None:
        if not self._tracing_enabled():
            return
        try:
            self.tracer.record_event(name, metadata, trace_metadata)
        except Exception as e:
            # Tracing failure is non-fatal
            logger.debug(f"Tracer failed on event {name}: {e}")

    def _start_span(self, name: str, metadata: Dict[str, Any], trace_metadata: TraceMetadata) -> Any:
        if not self._tracing_enabled():
            return None
        try:
            return self.tracer.start_span(name, metadata, trace_metadata)
        except Exception as e:
            logger.debug(f"Tracer failed to start span {name}: {e}")
            return None

    def _end_span(self, span: Any, status: str, metadata: Dict[str, Any]) -> None:
        if span is None:
            return
        try:
            self.tracer.end_span(span, status, metadata)
        except Exception as e:
            logger.debug(f"Tracer failed to end span: {e}")
