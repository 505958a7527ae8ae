"""Logic for finding the extent of JavaScript literal expressions in source text."""

import re

WHITESPACE_RE = re.compile(r"\s*")
STRING_RE = re.compile(r"\"(?:[^\"\\\n]|\\.)*\"|'(?:[^'\\\n]|\\.)*'")
REGEX_RE = re.compile(r"/(?![*/])(?:[^/\\\[\n]|\\.|\[(?:[^\]\\\n]|\\.)*\])+/[gimsuy]*")
NUMBER_RE = re.compile(
    r"-?(?:0[xX][0-9a-fA-F]+|(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?)"
)
KEYWORD_RE = re.compile(r"(?:true|false|null|undefined)(?![\w$])")
IDENT_RE = re.compile(r"[A-Za-z_$][\w$]*")

# Scalar literal shapes, tried in order after array/object openers.
SCALAR_PATTERNS = (STRING_RE, REGEX_RE, NUMBER_RE, KEYWORD_RE)


class JsLiteralScanner:
    """Scans a single literal: string, regex, number, keyword, array or object.

    Bare identifiers are not literals, so ``[ho, ho]`` and ``{ho: 5, ho}`` are
    rejected as a whole rather than partially matched.
    """

    def scan(self, text: str, pos: int = 0) -> int | None:
        """Return the offset just past the literal starting at ``pos``, or None."""
        pos = skip_whitespace(text, pos)
        if pos >= len(text):
            return None

        ch = text[pos]
        if ch == "[":
            return self._scan_array(text, pos)
        if ch == "{":
            return self._scan_object(text, pos)

        for pattern in SCALAR_PATTERNS:
            match = pattern.match(text, pos)
            if match:
                return match.end()
        return None

    def _scan_array(self, text: str, pos: int) -> int | None:
        pos = skip_whitespace(text, pos + 1)
        if text.startswith("]", pos):
            return pos + 1

        while True:
            end = self.scan(text, pos)
            if end is None:
                return None
            pos = skip_whitespace(text, end)
            if text.startswith(",", pos):
                pos = skip_whitespace(text, pos + 1)
                # Trailing comma before the closing bracket
                if text.startswith("]", pos):
                    return pos + 1
                continue
            if text.startswith("]", pos):
                return pos + 1
            return None

    def _scan_object(self, text: str, pos: int) -> int | None:
        pos = skip_whitespace(text, pos + 1)
        if text.startswith("}", pos):
            return pos + 1

        while True:
            key = (
                STRING_RE.match(text, pos)
                or IDENT_RE.match(text, pos)
                or NUMBER_RE.match(text, pos)
            )
            if not key:
                return None
            pos = skip_whitespace(text, key.end())
            if not text.startswith(":", pos):
                return None
            end = self.scan(text, pos + 1)
            if end is None:
                return None
            pos = skip_whitespace(text, end)
            if text.startswith(",", pos):
                pos = skip_whitespace(text, pos + 1)
                if text.startswith("}", pos):
                    return pos + 1
                continue
            if text.startswith("}", pos):
                return pos + 1
            return None


def skip_whitespace(text: str, pos: int) -> int:
    """Return the first non-whitespace offset at or after ``pos``."""
    match = WHITESPACE_RE.match(text, pos)
    return match.end() if match else pos


def skip_to_closing_bracket(text: str, pos: int) -> int | None:
    """Return the offset just past the ``]`` that closes an already-open bracket.

    Nested brackets, quoted strings and regex literals are skipped. Returns
    None when the bracket is never closed.
    """
    depth = 0
    n = len(text)
    while pos < n:
        ch = text[pos]
        if ch in "'\"/":
            match = (REGEX_RE if ch == "/" else STRING_RE).match(text, pos)
            if match:
                pos = match.end()
                continue
        elif ch == "[":
            depth += 1
        elif ch == "]":
            if depth == 0:
                return pos + 1
            depth -= 1
        pos += 1
    return None
