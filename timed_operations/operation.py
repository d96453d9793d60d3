"""
Records operation timings to a logger.

An ``Operation`` writes exactly one event when it ends: either ``completed`` or
``abandoned``, together with the elapsed time in milliseconds. Instances are
meant to be driven by a single thread or task.
"""

import logging
import time
from datetime import timedelta
from enum import Enum
from typing import Any

from timed_operations import utils
from timed_operations.config import OperationOptions
from timed_operations.exceptions import MissingArgumentError
from timed_operations.templates import MessageTemplate, TemplateMessage, hole_name

_NO_VALUE = object()


def _check_property_name(name: str, argument: str) -> None:
    if name is None:
        raise MissingArgumentError(argument)


class Properties(str, Enum):
    """Property names attached to events written by an operation."""

    ELAPSED = "Elapsed"
    """The timing, in milliseconds."""

    OUTCOME = "Outcome"
    """Completion status, either ``completed`` or ``abandoned``."""


class Outcome(Enum):
    """How an operation ended."""

    COMPLETED = "completed"
    ABANDONED = "abandoned"


class CompletionBehaviour(Enum):
    """What leaving the operation's scope does."""

    COMPLETE = "complete"
    ABANDON = "abandon"
    SILENT = "silent"


class Operation:
    """
    A timed unit of work that logs its outcome once.

    Operations are created with ``time_operation`` (completed when the scope
    ends) or ``begin_operation`` (abandoned when the scope ends unless
    ``complete()`` was called first).

    The event is written with ``logger.log(level, msg, exc_info=..., extra=...)``.
    ``msg`` is a ``TemplateMessage`` and ``extra`` puts ``message_template`` and
    ``properties`` on the record. A ``logging.LoggerAdapter`` before Python 3.13
    replaces ``extra`` with its own mapping; the same values are then available
    as ``record.msg.template.text`` and ``record.msg.properties``.

    Usage:
        with begin_operation(logger, "Submitting order {OrderId}", order_id) as op:
            submit(order_id)
            op.complete()
    """

    def __init__(
        self,
        logger: logging.Logger,
        message_template: str,
        args=(),
        behaviour: CompletionBehaviour = CompletionBehaviour.COMPLETE,
        options: OperationOptions | None = None,
    ):
        if logger is None:
            raise MissingArgumentError("logger")
        if message_template is None:
            raise MissingArgumentError("message_template")
        if args is None:
            raise MissingArgumentError("args")

        self._logger = logger
        self._message_template = message_template
        self._args = tuple(args)
        self._behaviour = CompletionBehaviour(behaviour)

        options = options or OperationOptions()
        self._completion_level = options.completion_level
        self._abandonment_level = options.abandonment_level
        self._warning_threshold = options.warning_threshold

        self._exception: BaseException | None = None
        self._stop: float | None = None
        self._start = time.monotonic()

    @property
    def message_template(self) -> str:
        return self._message_template

    @property
    def behaviour(self) -> CompletionBehaviour:
        return self._behaviour

    @property
    def elapsed(self) -> timedelta:
        """
        Time since the operation started.

        Keeps growing while the operation is running and is frozen by the first
        terminal action (complete, abandon, cancel or close).
        """
        stop = self._stop if self._stop is not None else time.monotonic()
        elapsed = stop - self._start

        # Some platforms report a clock going backwards over very short intervals
        if elapsed < 0:
            return timedelta(0)
        return timedelta(seconds=elapsed)

    def complete(self, result: Any = _NO_VALUE, result_name: str = "result") -> None:
        """
        Complete the operation, writing the event and elapsed time to the log.

        Args:
            result: Optional result value to include in the event.
            result_name (str): Property name for the result. Defaults to "result".
                Capture hints understood by the logging back end (``@Result``)
                may be used. Characters that cannot appear in a placeholder are
                written as ``_`` in the message text only.
        """
        _check_property_name(result_name, "result_name")

        if self._behaviour is CompletionBehaviour.SILENT:
            return

        if result is _NO_VALUE:
            self._write(self._completion_level, Outcome.COMPLETED)
        else:
            self._write(
                self._completion_level, Outcome.COMPLETED, "with result of", result_name, result
            )

    def abandon(self, reason: Any = _NO_VALUE, reason_name: str = "reason") -> None:
        """
        Abandon the operation, writing the event and elapsed time to the log.

        Args:
            reason: Optional reason for abandonment.
            reason_name (str): Property name for the reason. Defaults to "reason".
        """
        _check_property_name(reason_name, "reason_name")

        if self._behaviour is CompletionBehaviour.SILENT:
            return

        if reason is _NO_VALUE:
            self._write(self._abandonment_level, Outcome.ABANDONED)
        else:
            self._write(self._abandonment_level, Outcome.ABANDONED, "for", reason_name, reason)

    def cancel(self) -> None:
        """Cancel the operation. Nothing is written, now or when the scope ends."""
        self._stop_timing()
        self._behaviour = CompletionBehaviour.SILENT

    def close(self) -> None:
        """
        End the operation's scope.

        Operations from ``time_operation`` are completed; operations from
        ``begin_operation`` are recorded as abandoned. Does nothing if the
        operation already ended or was cancelled.
        """
        if self._behaviour is CompletionBehaviour.COMPLETE:
            self.complete()
        elif self._behaviour is CompletionBehaviour.ABANDON:
            self.abandon()

    def set_exception(self, exception: BaseException | None) -> "Operation":
        """
        Attach an exception to the event this operation will write.

        Returns:
            Operation: The same operation, for chaining.
        """
        self._exception = exception
        return self

    def __enter__(self) -> "Operation":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
        self.close()
        return False

    def _stop_timing(self) -> None:
        if self._stop is None:
            self._stop = time.monotonic()

    def _write(
        self,
        level: int,
        outcome: Outcome,
        connective: str | None = None,
        property_name: str | None = None,
        value: Any = None,
    ) -> None:
        self._stop_timing()
        self._behaviour = CompletionBehaviour.SILENT

        elapsed = self.elapsed
        elapsed_ms = utils.total_milliseconds(elapsed)

        if (
            self._warning_threshold is not None
            and elapsed > self._warning_threshold
            and level < logging.WARNING
        ):
            level = logging.WARNING

        outcome_hole = f"{{{Properties.OUTCOME.value}}}"
        elapsed_hole = f"{{{Properties.ELAPSED.value}:0.0}}"
        hole = property_name

        if connective is None:
            template = f"{self._message_template} {outcome_hole} in {elapsed_hole} ms"
            args = (*self._args, outcome.value, elapsed_ms)
        else:
            hole = hole_name(property_name)
            template = (
                f"{self._message_template} {outcome_hole} {connective} "
                f"{{{hole}}} in {elapsed_hole} ms."
            )
            args = (*self._args, outcome.value, value, elapsed_ms)

        parsed = MessageTemplate(template)
        properties = parsed.properties(args)
        # Names that cannot appear inside braces still key the value
        if hole != property_name:
            properties.pop(hole, None)
            properties[property_name] = value

        message = TemplateMessage(parsed, args, properties)
        self._logger.log(
            level,
            message,
            exc_info=self._exception,
            extra={"message_template": template, "properties": message.properties},
        )

    def __repr__(self) -> str:
        return f"<Operation {self._message_template!r} {self._behaviour.value}>"
