"""
Grammar notation IR.

A ``Grammar`` owns an ordered list of ``Production`` records; each named
production owns an ``Ebnf`` expression tree. Formatting trivia (trailing
whitespace, line comments, newlines) rides along on the nodes so that the
serializer can reproduce the source text.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator


class EbnfKind(str, Enum):
    """Kinds of EBNF expression nodes."""

    TERMINAL = "terminal"
    EXTENDED_TERMINAL = "extended_terminal"
    REFERENCE = "reference"
    ONE_OR_MORE = "one_or_more"
    ZERO_OR_MORE = "zero_or_more"
    ZERO_OR_ONE = "zero_or_one"
    CHOICE = "choice"
    SEQUENCE = "sequence"


UNARY_KINDS = frozenset({EbnfKind.ONE_OR_MORE, EbnfKind.ZERO_OR_MORE, EbnfKind.ZERO_OR_ONE})
LEAF_KINDS = frozenset({EbnfKind.TERMINAL, EbnfKind.EXTENDED_TERMINAL, EbnfKind.REFERENCE})

UNARY_OPERATORS: dict[EbnfKind, str] = {
    EbnfKind.ONE_OR_MORE: "+",
    EbnfKind.ZERO_OR_MORE: "*",
    EbnfKind.ZERO_OR_ONE: "?",
}


class Ebnf(BaseModel):
    """
    One node of a grammar expression.

    Examples:
        - 'if': Ebnf(kind=TERMINAL, text="if")
        - '<identifier>': Ebnf(kind=EXTENDED_TERMINAL, text="identifier")
        - expr?: Ebnf(kind=ZERO_OR_ONE, children=[Ebnf(kind=REFERENCE, text="expr")])
        - a | b: Ebnf(kind=CHOICE, children=[a, b])
    """

    kind: EbnfKind
    text: str = ""  # terminal text or referenced production name
    children: list["Ebnf"] = Field(default_factory=list)

    # Formatting trivia, not part of the meaning of the node
    following_whitespace: str = ""
    following_comment: str = ""
    following_newline: bool = False

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def check_shape(self) -> "Ebnf":
        if self.kind in LEAF_KINDS and self.children:
            raise ValueError(f"{self.kind.value} node cannot have children")
        if self.kind in UNARY_KINDS and len(self.children) != 1:
            raise ValueError(f"{self.kind.value} node needs exactly one child")
        if self.kind in (EbnfKind.CHOICE, EbnfKind.SEQUENCE) and not self.children:
            raise ValueError(f"{self.kind.value} node needs at least one child")
        if self.kind == EbnfKind.EXTENDED_TERMINAL and (not self.text or "?" in self.text):
            raise ValueError("Extended terminal must be non-empty and cannot contain '?'")
        return self

    @property
    def is_unary(self) -> bool:
        return self.kind in UNARY_KINDS

    @property
    def is_composite(self) -> bool:
        return self.kind in (EbnfKind.CHOICE, EbnfKind.SEQUENCE)

    @classmethod
    def terminal(cls, text: str) -> "Ebnf":
        return cls(kind=EbnfKind.TERMINAL, text=text)

    @classmethod
    def extended(cls, text: str) -> "Ebnf":
        return cls(kind=EbnfKind.EXTENDED_TERMINAL, text=text)

    @classmethod
    def ref(cls, name: str) -> "Ebnf":
        return cls(kind=EbnfKind.REFERENCE, text=name)

    @classmethod
    def unary(cls, kind: EbnfKind, child: "Ebnf") -> "Ebnf":
        return cls(kind=kind, children=[child])

    @classmethod
    def choice(cls, *children: "Ebnf") -> "Ebnf":
        """Build a choice; a single alternative collapses to itself."""
        if len(children) == 1:
            return children[0]
        return cls(kind=EbnfKind.CHOICE, children=list(children))

    @classmethod
    def sequence(cls, *children: "Ebnf") -> "Ebnf":
        """Build a sequence; a single element collapses to itself."""
        if len(children) == 1:
            return children[0]
        return cls(kind=EbnfKind.SEQUENCE, children=list(children))


class Production(BaseModel):
    """
    One entry of a grammar: a named rule, a full-line comment, or a blank line.

    ``link`` and ``link_name`` point at the document section that defines
    the rule; they are filled in by the spec reader and never serialized.
    """

    name: str | None = None
    body: Ebnf | None = None
    comment: str = ""
    rule_starts_on_newline: bool = False
    link: str | None = None
    link_name: str | None = None

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def check_shape(self) -> "Production":
        if (self.name is None) != (self.body is None):
            raise ValueError("A production needs both a name and a body, or neither")
        return self

    @property
    def is_rule(self) -> bool:
        return self.name is not None

    @property
    def is_comment(self) -> bool:
        return self.name is None and bool(self.comment)

    @property
    def is_blank(self) -> bool:
        return self.name is None and not self.comment


class Grammar(BaseModel):
    """A named, ordered list of productions."""

    name: str = ""
    productions: list[Production] = Field(default_factory=list)
    newline: str = "\r\n"  # line ending used when serializing

    def rules(self) -> list[Production]:
        """Return the named productions in order."""
        return [p for p in self.productions if p.is_rule]

    def production_names(self) -> list[str]:
        return [p.name for p in self.productions if p.name is not None]

    def get(self, name: str) -> Production | None:
        """Return the first production called ``name``."""
        for production in self.productions:
            if production.name == name:
                return production
        return None
