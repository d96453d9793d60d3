"""
Core library interface for timed operations.

Example usage:
    ```python
    import logging
    from timed_operations import begin_operation, time_operation

    logger = logging.getLogger(__name__)

    # Option 1: fire-and-forget, logs "completed" when the block ends
    with time_operation(logger, "Loading catalog {Region}", "eu-west"):
        load_catalog("eu-west")

    # Option 2: explicit outcome, logs "abandoned" unless completed
    with begin_operation(logger, "Charging card for order {OrderId}", order.id) as op:
        receipt = charge(order)
        op.complete(receipt.number, "ReceiptNumber")

    # Option 3: custom levels and a slow-operation threshold
    with begin_operation(
        logger,
        "Rebuilding index",
        completed_level=logging.DEBUG,
        abandoned_level=logging.ERROR,
        warning_threshold=timedelta(seconds=2),
    ) as op:
        rebuild()
        op.complete()
    ```
"""

import logging
from datetime import timedelta

from timed_operations.config import OperationOptions
from timed_operations.operation import CompletionBehaviour, Operation


def time_operation(
    logger: logging.Logger,
    message_template: str,
    *args,
    level: int | str = logging.INFO,
    warning_threshold: timedelta | None = None,
) -> Operation:
    """
    Begin a new timed operation that is completed when its scope ends.

    Args:
        logger: The logger through which the timing will be recorded.
        message_template: A log message describing the operation, with named
            placeholders such as ``{CustomerId}``.
        *args: Values for the placeholders, in order. They are stored and only
            rendered when the operation ends, so do not pass values that are
            mutated during the operation.
        level: Level of the completion event. Defaults to INFO.
        warning_threshold: Write the event at WARNING or above when the
            operation takes longer than this.

    Returns:
        Operation: Use it in a ``with`` block, or call ``close()``.
    """
    options = OperationOptions(
        completion_level=level,
        abandonment_level=logging.WARNING,
        warning_threshold=warning_threshold,
    )
    return Operation(logger, message_template, args, CompletionBehaviour.COMPLETE, options)


def begin_operation(
    logger: logging.Logger,
    message_template: str,
    *args,
    completed_level: int | str = logging.INFO,
    abandoned_level: int | str = logging.WARNING,
    warning_threshold: timedelta | None = None,
    options: OperationOptions | None = None,
) -> Operation:
    """
    Begin a new timed operation that must be completed explicitly.

    Call ``Operation.complete()`` when the work succeeds. If the scope ends
    first, the operation is recorded as abandoned.

    Args:
        logger: The logger through which the timing will be recorded.
        message_template: A log message describing the operation, with named
            placeholders such as ``{CustomerId}``.
        *args: Values for the placeholders, in order.
        completed_level: Level used when the operation completes.
        abandoned_level: Level used when the operation is abandoned.
        warning_threshold: Write the event at WARNING or above when the
            operation takes longer than this.
        options: Prebuilt options (for example from ``OperationOptions.from_env``).
            When given, the level and threshold keywords are ignored.

    Returns:
        Operation: Use it in a ``with`` block, or call ``close()``.
    """
    if options is None:
        options = OperationOptions(
            completion_level=completed_level,
            abandonment_level=abandoned_level,
            warning_threshold=warning_threshold,
        )
    return Operation(logger, message_template, args, CompletionBehaviour.ABANDON, options)
