"""Data models for documentation nodes (classes and their members)."""

from dataclasses import dataclass, field

MEMBER_KINDS = ("cfg", "property", "method", "event")
PARAM_TAGNAME = "param"
CLASS_TAGNAME = "class"
DEFAULT_TYPE = "Object"


def default_members_hash() -> dict[str, list["MemberNode"]]:
    """Return an empty member list for every member kind."""
    return {kind: [] for kind in MEMBER_KINDS}


def validate_tagname(tagname: str | None) -> str:
    """Return the tagname if it names a member kind or a param."""
    if not tagname:
        msg = "Documentation node is missing its tagname"
        raise ValueError(msg)
    if tagname not in MEMBER_KINDS and tagname != PARAM_TAGNAME:
        msg = f"Unknown member tagname: {tagname}"
        raise ValueError(msg)
    return tagname


@dataclass
class MemberNode:
    """Represents a documented member (cfg, property, method, event) or a param."""

    tagname: str  # cfg/property/method/event/param
    name: str
    owner: str | None = None
    static: bool = False
    doc: str = ""
    type: str = DEFAULT_TYPE
    optional: bool = False
    default: str | None = None
    required: bool = False
    private: bool = False
    protected: bool = False
    params: list["MemberNode"] = field(default_factory=list)
    filename: str = ""
    linenr: int = 0

    def __post_init__(self) -> None:
        """Reject nodes without a usable tagname."""
        validate_tagname(self.tagname)


@dataclass
class ClassNode:
    """Represents a documented class declaration."""

    name: str
    doc: str = ""
    extends: str | None = None
    mixins: list[str] = field(default_factory=list)
    alternate_class_names: list[str] = field(default_factory=list)
    singleton: bool = False
    private: bool = False
    protected: bool = False
    xtypes: dict[str, list[str]] = field(default_factory=dict)
    members: dict[str, list[MemberNode]] = field(default_factory=default_members_hash)
    statics: dict[str, list[MemberNode]] = field(default_factory=default_members_hash)
    code_type: str | None = None  # e.g. "ext_define"
    filename: str = ""
    linenr: int = 0

    tagname = CLASS_TAGNAME

    def all_members(self) -> list[MemberNode]:
        """Return instance and static members in kind order."""
        out: list[MemberNode] = []
        for group in (self.members, self.statics):
            for kind in MEMBER_KINDS:
                out.extend(group.get(kind, []))
        return out


DocNode = ClassNode | MemberNode
