"""
Message templates with named placeholders.

Templates look like ``"Processing order {OrderId} for {@Customer}"``. Values are
bound positionally: the Nth placeholder, counting repeats, takes the Nth
argument. ``{{`` and ``}}`` are literal braces, and a brace that does not open
a valid placeholder is kept as text.
"""

import numbers
import re
from dataclasses import dataclass
from typing import Any

_TOKEN = re.compile(r"\{\{|\}\}|\{[^{}]*\}")
_NAME = r"[A-Za-z0-9_][A-Za-z0-9_.]*"
_PROPERTY_NAME = re.compile(rf"[@$]?{_NAME}")
_PLACEHOLDER = re.compile(
    r"\{(?P<hint>[@$]?)(?P<name>" + _NAME + r")"
    r"(?:,(?P<alignment>-?\d+))?(?::(?P<format>[^{}]*))?\}"
)
# .NET style custom numeric formats such as "0", "0.0" or "#,##0.00"
_NUMERIC_FORMAT = re.compile(r"(?P<integral>[#,]*0|#)(?:\.(?P<fraction>[0#]+))?")

_NOT_NAME_CHAR = re.compile(r"[^A-Za-z0-9_.]")
_UNBOUND = object()

NULL_TEXT = "(null)"


@dataclass(frozen=True)
class Placeholder:
    """A single ``{Name,alignment:format}`` hole in a template."""

    name: str
    raw: str
    hint: str = ""
    alignment: int | None = None
    format: str | None = None

    def render(self, value: Any) -> str:
        text = format_value(value, self.format)
        if self.alignment is None:
            return text
        if self.alignment < 0:
            return text.ljust(-self.alignment)
        return text.rjust(self.alignment)


def format_value(value: Any, fmt: str | None = None) -> str:
    """
    Render a single template value.

    Args:
    - value: The value to render.
    - fmt (str | None): Optional format, either a .NET style numeric pattern
      (``0.0``) or a Python format spec (``.3f``, ``>8``).

    Returns:
    - str: The rendered text. ``None`` renders as ``(null)``.
    """
    if value is None:
        return NULL_TEXT

    if fmt:
        match = _NUMERIC_FORMAT.fullmatch(fmt)
        if match and isinstance(value, numbers.Real) and not isinstance(value, bool):
            grouping = "," if "," in match["integral"] else ""
            decimals = len(match["fraction"] or "")
            return format(float(value), f"{grouping}.{decimals}f")
        try:
            return format(value, fmt)
        except (TypeError, ValueError):
            return str(value)

    if isinstance(value, (list, tuple, set, frozenset)):
        return ", ".join(format_value(item) for item in value)
    return str(value)


class MessageTemplate:
    """A parsed message template."""

    def __init__(self, text: str):
        if not isinstance(text, str):
            raise TypeError(f"Message template must be a string, got {type(text).__name__}")

        self.text = text
        self.tokens: list[str | Placeholder] = []

        position = 0
        literal = []
        for match in _TOKEN.finditer(text):
            literal.append(text[position : match.start()])
            position = match.end()
            token = match.group()

            if token in ("{{", "}}"):
                literal.append(token[0])
                continue

            placeholder = _PLACEHOLDER.fullmatch(token)
            if placeholder is None:
                literal.append(token)
                continue

            if literal:
                self._add_text("".join(literal))
                literal = []

            alignment = placeholder["alignment"]
            self.tokens.append(
                Placeholder(
                    name=placeholder["name"],
                    raw=token,
                    hint=placeholder["hint"],
                    alignment=int(alignment) if alignment is not None else None,
                    format=placeholder["format"],
                )
            )

        literal.append(text[position:])
        self._add_text("".join(literal))

    def _add_text(self, value: str) -> None:
        if value:
            self.tokens.append(value)

    @property
    def placeholders(self) -> list[Placeholder]:
        return [token for token in self.tokens if isinstance(token, Placeholder)]

    @property
    def names(self) -> list[str]:
        """Placeholder names in order of appearance, repeats included."""
        return [placeholder.name for placeholder in self.placeholders]

    def properties(self, args) -> dict[str, Any]:
        """
        Bind positional arguments to placeholder names.

        The Nth placeholder takes the Nth argument. When a name appears more
        than once, the value bound to its last occurrence is kept.
        """
        return {
            placeholder.name: value for placeholder, value in zip(self.placeholders, args)
        }

    def render(self, args) -> str:
        """Render the template, leaving unbound placeholders as written."""
        values = iter(args)
        parts = []
        for token in self.tokens:
            if isinstance(token, str):
                parts.append(token)
                continue
            value = next(values, _UNBOUND)
            if value is _UNBOUND:
                parts.append(token.raw)
            else:
                parts.append(token.render(value))
        return "".join(parts)

    def __repr__(self) -> str:
        return f"<MessageTemplate {self.text!r}>"


class TemplateMessage:
    """
    A log message rendered lazily from a template and its arguments.

    Passed as ``msg`` to ``logging.Logger.log``; the logging module calls
    ``str()`` on it only when a handler formats the record. ``properties``
    defaults to the template's binding of ``args``.
    """

    __slots__ = ("template", "args", "_properties")

    def __init__(self, template: MessageTemplate | str, args=(), properties=None):
        if isinstance(template, str):
            template = MessageTemplate(template)
        self.template = template
        self.args = tuple(args)
        self._properties = properties

    @property
    def properties(self) -> dict[str, Any]:
        if self._properties is None:
            return self.template.properties(self.args)
        return dict(self._properties)

    def __str__(self) -> str:
        return self.template.render(self.args)

    def __repr__(self) -> str:
        return f"<TemplateMessage {self.template.text!r} args={self.args!r}>"


def is_property_name(name: str) -> bool:
    """Whether ``name`` can be used as ``{name}`` in a template."""
    return isinstance(name, str) and _PROPERTY_NAME.fullmatch(name) is not None


def hole_name(name: str) -> str:
    """
    Return text that can stand for ``name`` inside ``{...}``.

    Valid names are returned unchanged. Otherwise every character that
    cannot appear in a placeholder name is replaced with ``_``.

    Args:
        name: Property name chosen by the caller

    Returns:
        A name accepted by is_property_name
    """
    if is_property_name(name):
        return name
    text = _NOT_NAME_CHAR.sub("_", str(name).lstrip("@$"))
    if not text or text.startswith("."):
        text = "_" + text
    return text
