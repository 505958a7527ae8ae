"""Logic for inferring default values and their types from literal source text."""

import logging
import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from doc_aggregator.doc_node import DEFAULT_TYPE
from doc_aggregator.load_config import DEFAULT_CONFIG
from doc_aggregator.js_literal import (
    KEYWORD_RE,
    NUMBER_RE,
    STRING_RE,
    JsLiteralScanner,
    skip_to_closing_bracket,
    skip_whitespace,
)

if TYPE_CHECKING:
    from doc_aggregator.doc_node import MemberNode

logger = logging.getLogger(__name__)

# `name: value`, `name = value`, `this.name = value`, `var name = value`
CODE_ASSIGN_RE = re.compile(
    r"\s*(?:var\s+|this\.)?"
    r"(?P<name>[A-Za-z_$][\w$]*|'[^'\n]*'|\"[^\"\n]*\")"
    r"\s*(?::|=(?!=))\s*"
)


@dataclass(frozen=True)
class CodeDefault:
    """A name and optional default value read from the code following a comment."""

    name: str
    default: str | None
    type: str | None


def infer_type(default: str | None) -> str | None:
    """Infer the type name from the shape of a default value literal."""
    if not default:
        return None
    first = default[0]
    if first in "'\"":
        return "String"
    if first == "/":
        return "RegExp"
    if first == "[":
        return "Array"
    if first == "{":
        return "Object"
    if default in {"true", "false"}:
        return "Boolean"
    if NUMBER_RE.fullmatch(default):
        return "Number"
    # null and undefined say nothing about the type
    return None


class DefaultValueExtractor:
    """Extracts literal default values from inline brackets or trailing code."""

    def __init__(self, config: dict[str, Any] | None = None) -> None:
        """Initialize the extractor with the CSS prefix substitution settings."""
        css_prefix = (config or DEFAULT_CONFIG).get(
            "css_prefix", DEFAULT_CONFIG["css_prefix"]
        )
        self.css_prefix_expression: str = css_prefix["expression"]
        self.css_prefix_value: str = css_prefix["value"]
        self._css_prefix_re = (
            re.compile(re.escape(self.css_prefix_expression) + r"\s*\+\s*")
            if self.css_prefix_expression
            else None
        )
        self.scanner = JsLiteralScanner()

    def scan_default(self, text: str, pos: int = 0) -> tuple[str | None, int]:
        """Scan one literal at ``pos``.

        Returns the literal source text (or None) and the offset where scanning
        stopped.
        """
        pos = skip_whitespace(text, pos)

        if self._css_prefix_re:
            prefix = self._css_prefix_re.match(text, pos)
            if prefix:
                string = STRING_RE.match(text, prefix.end())
                if string:
                    literal = string.group(0)
                    value = literal[0] + self.css_prefix_value + literal[1:]
                    return value, string.end()

        end = self.scanner.scan(text, pos)
        if end is None:
            return None, pos
        return text[pos:end], end

    def parse_inline_default(self, text: str, pos: int) -> tuple[str | None, int]:
        """Parse the default after ``=`` inside ``[name=value]``.

        The longest literal prefix wins; anything after it up to the closing
        bracket is dropped. Returns the default and the offset past ``]``, or
        the offset where scanning stopped when the bracket is never closed.
        """
        value, end = self.scan_default(text, pos)
        close = skip_to_closing_bracket(text, end)
        if value is None:
            logger.warning(
                "Ignoring unrecognized default value: %s",
                text[pos : close - 1] if close is not None else text[pos:],
            )
        return value, close if close is not None else end

    def detect_code_default(
        self, code: str, name: str | None = None
    ) -> CodeDefault | None:
        """Read ``name: literal`` style code that follows a doc-comment.

        When ``name`` is given, the code must assign that same name.
        """
        match = CODE_ASSIGN_RE.match(code)
        if not match:
            return None

        code_name = match.group("name").strip("'\"")
        if name and name != code_name:
            return None
        if KEYWORD_RE.fullmatch(code_name):
            return None

        value, _ = self.scan_default(code, match.end())
        return CodeDefault(name=code_name, default=value, type=infer_type(value))

    def apply_code_default(self, node: "MemberNode", code: str) -> None:
        """Fill in name, default and type of ``node`` from the code after it."""
        found = self.detect_code_default(code, node.name or None)
        if found is None:
            return

        if not node.name:
            node.name = found.name
        if node.default is None and found.default is not None:
            node.default = found.default
            if node.type == DEFAULT_TYPE and found.type:
                node.type = found.type
