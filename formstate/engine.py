"""FormEngine: form-state and validation engine.

This module provides the FormEngine class that owns one form's field values
and field errors, runs every field rule on submit, and gates the success
callback on a fully error-free pass.

Usage:
    >>> from formstate.engine import FormEngine
    >>> from formstate.validators import required_error
    >>> submitted = []
    >>> engine = FormEngine(
    ...     schema={"name": ""},
    ...     rule_set={"name": {"validatorFn": lambda value, values: required_error(value)}},
    ...     on_submit=submitted.append,
    ... )
    >>> engine.submit().is_valid
    False
    >>> engine.errors
    {'name': 'This is a required field'}
    >>> engine.change("name", "Ada")
    >>> engine.submit().is_valid
    True
    >>> submitted
    [{'name': 'Ada'}]
"""

import asyncio
import inspect
import logging
import uuid
from collections import deque
from datetime import datetime, timezone
from typing import Any, Deque, Dict, List, Optional, Set

from formstate.config import validate_config
from formstate.errors import FormConfigurationError, SubmitResult, UnknownFieldError
from formstate.events import EventEmitter, FormEvent
from formstate.rules import Rule
from formstate.types import (
    ErrorsCallback,
    ErrorState,
    EventType,
    Schema,
    SubmitCallback,
    ValueState,
    empty_errors,
)

logger = logging.getLogger(__name__)


async def _await(awaitable: Any) -> Any:
    return await awaitable


class FormEngine:
    """Owner of one form's ValueState and ErrorState.

    The engine is constructed from a schema (field -> default value), a rule
    set (field -> rule) and a success callback, plus an optional failure
    callback. Construction validates all inputs first; on any problem it
    raises ``FormConfigurationError`` and no engine is created.

    Both state mappings are replaced wholesale by every operation, never
    mutated in place, so a mapping handed out earlier (to a callback, or via
    ``values``/``errors``) never changes afterwards.

    Attributes:
        form_id: Identifier recorded on every emitted event
        schema: Copy of the schema the engine was built from
    """

    def __init__(
        self,
        schema: Schema,
        rule_set: Dict[str, Any],
        on_submit: SubmitCallback,
        on_errors: Optional[ErrorsCallback] = None,
        emitter: Optional[EventEmitter] = None,
        form_id: Optional[str] = None,
        history_size: int = 0,
    ):
        """Validate the inputs and initialize state.

        Args:
            schema: Field name -> default string value. Keys are the form's
                fixed field set; their order is the evaluation order.
            rule_set: Field name -> rule. Each rule is a ``FunctionRule``,
                ``FixedMessageRule`` or ``AlwaysValidRule``, or a mapping
                ``{"validatorFn": fn_or_False}``.
            on_submit: Called with a ValueState snapshot when a submit finds
                no errors. May return an awaitable.
            on_errors: Called with the new ErrorState when a submit finds
                at least one error.
            emitter: Optional event emitter to dispatch events to
            form_id: Optional identifier for emitted events
            history_size: Number of most recent events kept for
                ``get_events()``. 0 (the default) keeps none; use an
                ``emitter`` to observe every event.

        Raises:
            FormConfigurationError: If any input is malformed
        """
        if isinstance(history_size, bool) or not isinstance(history_size, int) or history_size < 0:
            raise FormConfigurationError(
                f"expected history_size to be a non-negative int, but got {history_size!r}"
            )

        self._rules: Dict[str, Rule] = validate_config(schema, rule_set, on_submit, on_errors)

        self.schema: Schema = dict(schema)
        self.form_id = form_id or f"form_{uuid.uuid4().hex[:16]}"
        self._on_submit = on_submit
        self._on_errors = on_errors
        self._emitter = emitter
        self._values: ValueState = dict(self.schema)
        self._errors: ErrorState = empty_errors(self.schema)
        self._events: Deque[FormEvent] = deque(maxlen=history_size)
        self._pending: Set["asyncio.Task[Any]"] = set()

        logger.debug("Created %s with fields: %s", self.form_id, ", ".join(self.schema))

    @property
    def values(self) -> ValueState:
        """Copy of the current ValueState."""
        return dict(self._values)

    @property
    def errors(self) -> ErrorState:
        """Copy of the current ErrorState."""
        return dict(self._errors)

    @property
    def rules(self) -> Dict[str, Rule]:
        """Copy of the normalized rules, in schema key order."""
        return dict(self._rules)

    def change(self, key: str, value: str) -> None:
        """Replace the value of one field.

        No validation runs and ErrorState is left untouched.

        Raises:
            UnknownFieldError: If ``key`` is not defined in the schema
        """
        if key not in self._values:
            raise UnknownFieldError(key)

        self._values = {**self._values, key: value}
        self._record(EventType.FIELD_CHANGED, {"key": key})

    def evaluate(self) -> ErrorState:
        """Run every field's rule against the current values.

        Pure with respect to engine state: nothing is stored and no callback
        fires. Every field is evaluated even after an earlier field fails.

        Returns:
            A full ErrorState in schema key order
        """
        snapshot = dict(self._values)
        errors = empty_errors(self.schema)
        for key, rule in self._rules.items():
            errors[key] = rule.evaluate(snapshot[key], dict(snapshot))
        return errors

    def submit(self) -> SubmitResult:
        """Validate all fields and dispatch to the success or failure callback.

        ErrorState is replaced with the freshly computed mapping, so errors
        left over from an earlier submit never survive a passing one. When no
        field has an error, ``on_submit`` receives a snapshot of the values;
        otherwise ``on_errors`` (if set) receives the new ErrorState.
        Exactly one of the two callbacks fires per call.

        Returns:
            SubmitResult describing the outcome
        """
        snapshot = dict(self._values)
        errors = self.evaluate()
        invalid = [key for key, message in errors.items() if message]

        if not invalid:
            logger.debug("Submit on %s passed", self.form_id)
            self._errors = errors
            self._record(EventType.SUBMIT_SUCCEEDED, {"values": dict(snapshot)})
            self._dispatch(self._on_submit(dict(snapshot)))
            return SubmitResult(is_valid=True, values=snapshot, errors=dict(errors), invalid_fields=[])

        logger.debug("Submit on %s failed for: %s", self.form_id, ", ".join(invalid))
        self._errors = errors
        self._record(EventType.SUBMIT_FAILED, {"errors": dict(errors)})
        if self._on_errors is not None:
            self._dispatch(self._on_errors(dict(errors)))
        return SubmitResult(is_valid=False, values=snapshot, errors=dict(errors), invalid_fields=invalid)

    def clear_errors(self) -> None:
        """Reset ErrorState to all ``False``."""
        self._errors = empty_errors(self.schema)
        self._record(EventType.ERRORS_CLEARED)

    def clear_state(self) -> None:
        """Reset ValueState to the schema defaults. ErrorState is untouched."""
        self._values = dict(self.schema)
        self._record(EventType.STATE_CLEARED)

    def get_events(self) -> List[FormEvent]:
        """The last ``history_size`` events recorded by this engine, oldest first."""
        return list(self._events)

    def _dispatch(self, result: Any) -> None:
        """Run an awaitable callback result without blocking a running loop.

        Inside a running event loop the awaitable becomes a task the engine
        does not wait for. Outside one it is driven to completion here.
        """
        if not inspect.isawaitable(result):
            return

        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            asyncio.run(_await(result))
            return

        task = loop.create_task(_await(result))
        self._pending.add(task)
        task.add_done_callback(self._task_done)

    def _task_done(self, task: "asyncio.Task[Any]") -> None:
        self._pending.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error("Callback task on %s failed", self.form_id, exc_info=exc)

    def _record(self, event_type: EventType, payload: Optional[Dict[str, Any]] = None) -> None:
        event = FormEvent(
            event_id=f"evt_{uuid.uuid4().hex[:16]}",
            type=event_type,
            form_id=self.form_id,
            ts=datetime.now(timezone.utc),
            payload=payload,
        )
        self._events.append(event)
        if self._emitter is not None:
            self._emitter.emit(event)

    def __repr__(self) -> str:
        return f"FormEngine(form_id={self.form_id!r}, fields={list(self.schema)!r})"


__all__ = [
    "FormEngine",
]
