"""
Timed Operations - log the outcome and duration of a unit of work as one event.
"""

from . import (
    config,
    exceptions,
    operation,
    templates,
    utils,
)

# Import main public API
from .config import TRACE, OperationOptions, resolve_level
from .core import begin_operation, time_operation
from .exceptions import MissingArgumentError, UnknownLevelError
from .operation import CompletionBehaviour, Operation, Outcome, Properties
from .templates import MessageTemplate, TemplateMessage

__version__ = "0.1.0"

__all__ = [
    # High-level API (recommended for most users)
    "begin_operation",
    "time_operation",
    "Operation",
    "OperationOptions",
    "TRACE",
    # Supporting types
    "CompletionBehaviour",
    "MessageTemplate",
    "MissingArgumentError",
    "Outcome",
    "Properties",
    "TemplateMessage",
    "UnknownLevelError",
    "resolve_level",
    # Low-level modules (for advanced usage)
    "config",
    "exceptions",
    "operation",
    "templates",
    "utils",
]
