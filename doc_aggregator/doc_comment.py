"""Logic for building documentation nodes out of doc-comment text.

Each comment is split into an untagged description and a list of ``@tag``
sections. The first kind tag (``@class``, ``@cfg``, ``@property``, ``@method``
or ``@event``) decides which node is built; without one the code that follows
the comment decides.
"""

import logging
import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from doc_aggregator.default_values import DefaultValueExtractor, infer_type
from doc_aggregator.doc_node import (
    DEFAULT_TYPE,
    MEMBER_KINDS,
    ClassNode,
    DocNode,
    MemberNode,
)
from doc_aggregator.optional_params import parse_param_name, strip_required_marker

if TYPE_CHECKING:
    from doc_aggregator.source_unit import Chunk

logger = logging.getLogger(__name__)

COMMENT_OPEN_RE = re.compile(r"^\s*/\*\*?")
COMMENT_CLOSE_RE = re.compile(r"\*/\s*$")
LINE_PREFIX_RE = re.compile(r"^\s*\* ?")
TAG_LINE_RE = re.compile(r"^\s*@(\w+)\b[ \t]*(.*)$")
TYPE_RE = re.compile(r"\s*\{((?:[^{}]|\{[^{}]*\})*)\}")
WORD_RE = re.compile(r"\s*([\w$.]+)")
FUNCTION_RE = re.compile(
    r"\s*(?:function\s+(?P<decl>[\w$]+)|(?P<prop>[\w$.]+)\s*[:=]\s*function\b)"
)
EXT_DEFINE_RE = re.compile(r"\s*Ext\.define\(\s*['\"](?P<name>[\w$.]+)['\"]")

KIND_TAGS = frozenset({"class", *MEMBER_KINDS})
MEMBER_FLAGS = frozenset({"static", "private", "protected"})
CLASS_FLAGS = frozenset({"singleton", "private", "protected"})
DEFAULTED_KINDS = frozenset({"cfg", "property"})


@dataclass
class Tag:
    """A single ``@tag`` section of a doc-comment."""

    name: str
    text: str


def strip_comment_markers(comment: str) -> str:
    """Remove ``/**``, ``*/`` and leading ``*`` from every comment line."""
    text = COMMENT_CLOSE_RE.sub("", COMMENT_OPEN_RE.sub("", comment))
    return "\n".join(LINE_PREFIX_RE.sub("", line) for line in text.splitlines())


def split_tags(body: str) -> tuple[str, list[Tag]]:
    """Split a comment body into its leading description and tag sections."""
    doc_lines: list[str] = []
    tags: list[Tag] = []
    for line in body.splitlines():
        match = TAG_LINE_RE.match(line)
        if match:
            tags.append(Tag(match.group(1), match.group(2)))
        elif tags:
            tags[-1].text += "\n" + line
        else:
            doc_lines.append(line)
    return "\n".join(doc_lines).strip(), tags


def parse_type(text: str) -> tuple[str | None, str]:
    """Split a leading ``{Type}`` off ``text``."""
    match = TYPE_RE.match(text)
    if match:
        return match.group(1).strip(), text[match.end() :]
    return None, text


def split_word(text: str) -> tuple[str, str]:
    """Split the first dotted identifier off ``text``."""
    match = WORD_RE.match(text)
    if match:
        return match.group(1), text[match.end() :].strip()
    return "", text.strip()


def join_doc(parts: list[str]) -> str:
    """Join non-empty description fragments into a single doc text."""
    return "\n".join(p.strip() for p in parts if p and p.strip())


class DocCommentBuilder:
    """Builds one ``DocNode`` per doc-comment, resolving defaults and optionality."""

    def __init__(self, config: dict[str, Any] | None = None) -> None:
        """Initialize the builder and its default-value extractor."""
        self.extractor = DefaultValueExtractor(config)

    def build(self, chunk: "Chunk", filename: str = "") -> DocNode:
        """Build a class or member node from a comment and the code after it."""
        doc, tags = split_tags(strip_comment_markers(chunk.comment))
        kind = next((t.name for t in tags if t.name in KIND_TAGS), None)
        if kind is None:
            kind = self._detect_kind(chunk.code)

        node: DocNode
        if kind == "class":
            node = self._build_class(doc, tags, chunk.code)
            if not node.name:
                msg = f"Class doc-comment without a name at {filename}:{chunk.linenr}"
                raise ValueError(msg)
        else:
            node = self._build_member(kind, doc, tags, chunk.code)

        node.filename = filename
        node.linenr = chunk.linenr
        return node

    def _detect_kind(self, code: str) -> str:
        if EXT_DEFINE_RE.match(code):
            return "class"
        if FUNCTION_RE.match(code):
            return "method"
        return "property"

    def _build_class(self, doc: str, tags: list[Tag], code: str) -> ClassNode:
        cls = ClassNode(name="")
        define = EXT_DEFINE_RE.match(code)
        if define:
            cls.name = define.group("name")
            cls.code_type = "ext_define"

        docs = [doc]
        constructor: MemberNode | None = None
        for tag in tags:
            if tag.name == "class":
                name, rest = split_word(tag.text)
                cls.name = name or cls.name
                docs.append(rest)
            elif tag.name == "extends":
                cls.extends = split_word(tag.text)[0] or None
            elif tag.name == "mixins":
                cls.mixins.extend(tag.text.replace(",", " ").split())
            elif tag.name == "alternateClassName":
                cls.alternate_class_names.extend(tag.text.replace(",", " ").split())
            elif tag.name == "xtype":
                cls.xtypes.setdefault("widget", []).extend(tag.text.split())
            elif tag.name in CLASS_FLAGS:
                setattr(cls, tag.name, True)
                docs.append(tag.text)
            elif tag.name == "cfg":
                cls.members["cfg"].append(self._defaulted_member("cfg", tag.text))
            elif tag.name == "constructor":
                constructor = MemberNode(
                    tagname="method", name="constructor", doc=tag.text.strip()
                )
                cls.members["method"].append(constructor)
            elif tag.name == "param" and constructor is not None:
                constructor.params.append(self._build_param(tag.text))
            else:
                logger.debug("Ignoring @%s in class doc-comment", tag.name)

        cls.doc = join_doc(docs)
        for member in cls.all_members():
            member.owner = cls.name
        return cls

    def _build_member(
        self, kind: str, doc: str, tags: list[Tag], code: str
    ) -> MemberNode:
        node = MemberNode(tagname=kind, name="")
        docs = [doc]
        kind_seen = False
        declared_type = False

        for tag in tags:
            if tag.name == kind and not kind_seen:
                kind_seen = True
                if kind in DEFAULTED_KINDS:
                    self._apply_defaulted_tag(node, tag.text)
                    declared_type = node.type != DEFAULT_TYPE
                    docs.append(node.doc)
                else:
                    node.name, rest = split_word(tag.text)
                    docs.append(rest)
            elif tag.name == "param":
                node.params.append(self._build_param(tag.text))
            elif tag.name == "member":
                node.owner = split_word(tag.text)[0] or None
            elif tag.name in MEMBER_FLAGS:
                setattr(node, tag.name, True)
                docs.append(tag.text)
            elif tag.name == "type":
                type_, _ = parse_type(tag.text)
                if type_:
                    node.type = type_
                    declared_type = True
            else:
                logger.debug("Ignoring @%s in %s doc-comment", tag.name, kind)

        node.doc = join_doc(docs)

        if kind in DEFAULTED_KINDS:
            if node.default is None:
                self.extractor.apply_code_default(node, code)
            elif not declared_type:
                node.type = infer_type(node.default) or node.type
        elif not node.name:
            function = FUNCTION_RE.match(code)
            if function:
                name = function.group("decl") or function.group("prop")
                node.name = name.split(".")[-1]
        return node

    def _defaulted_member(self, kind: str, text: str) -> MemberNode:
        node = MemberNode(tagname=kind, name="")
        self._apply_defaulted_tag(node, text)
        return node

    def _apply_defaulted_tag(self, node: MemberNode, text: str) -> None:
        """Read ``{Type} [name=default] description`` into a cfg or property."""
        type_, rest = parse_type(text)
        parsed = parse_param_name(rest, self.extractor)
        node.name = parsed.name
        node.optional = parsed.optional
        node.default = parsed.default
        node.doc = parsed.rest
        if type_:
            node.type = type_
        if node.tagname == "cfg":
            node.doc, node.required = strip_required_marker(node.doc)

    def _build_param(self, text: str) -> MemberNode:
        type_, rest = parse_type(text)
        parsed = parse_param_name(rest, self.extractor)
        param = MemberNode(
            tagname="param",
            name=parsed.name,
            doc=parsed.rest,
            optional=parsed.optional,
            default=parsed.default,
        )
        if type_:
            param.type = type_
        return param
