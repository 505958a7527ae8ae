"""Logic for detecting and stripping optional-parameter markers."""

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING

from doc_aggregator.js_literal import skip_to_closing_bracket, skip_whitespace

if TYPE_CHECKING:
    from doc_aggregator.default_values import DefaultValueExtractor

NAME_RE = re.compile(r"[A-Za-z_$][\w$]*(?:\.[A-Za-z_$][\w$]*)*(?:\.\.\.)?")
OPTIONAL_MARKER_RE = re.compile(r"\s*\(optional\)", re.IGNORECASE)
REQUIRED_MARKER_RE = re.compile(r"\s*\(required\)", re.IGNORECASE)


@dataclass
class ParamName:
    """A parameter name together with its optionality and the remaining text."""

    name: str
    optional: bool
    default: str | None
    rest: str


def strip_optional_marker(doc: str) -> tuple[str, bool]:
    """Strip ``(optional)`` when it directly follows the name."""
    match = OPTIONAL_MARKER_RE.match(doc)
    if match:
        return doc[match.end() :].strip(), True
    return doc.strip(), False


def strip_required_marker(doc: str) -> tuple[str, bool]:
    """Strip ``(required)`` when it directly follows the name."""
    match = REQUIRED_MARKER_RE.match(doc)
    if match:
        return doc[match.end() :].strip(), True
    return doc.strip(), False


def parse_param_name(text: str, extractor: "DefaultValueExtractor") -> ParamName:
    """Split ``text`` into a parameter name, its optionality and the description.

    Recognized forms, in priority order:

    - ``[name]`` or ``[name=literal]``
    - ``name (optional)``

    A bare ``optional`` word, or ``(optional)`` further into the description,
    leaves the parameter required.
    """
    text = text.lstrip()

    if text.startswith("["):
        pos = skip_whitespace(text, 1)
        match = NAME_RE.match(text, pos)
        name = match.group(0) if match else ""
        pos = skip_whitespace(text, match.end() if match else pos)

        default = None
        if text.startswith("=", pos):
            default, pos = extractor.parse_inline_default(text, pos + 1)
        else:
            # An unclosed bracket keeps everything after the name as description
            close = skip_to_closing_bracket(text, pos)
            pos = close if close is not None else pos

        rest, _ = strip_optional_marker(text[pos:])
        return ParamName(name=name, optional=True, default=default, rest=rest)

    match = NAME_RE.match(text)
    if not match:
        return ParamName(name="", optional=False, default=None, rest=text.strip())

    rest, optional = strip_optional_marker(text[match.end() :])
    return ParamName(name=match.group(0), optional=optional, default=None, rest=rest)
