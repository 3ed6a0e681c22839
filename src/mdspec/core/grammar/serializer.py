"""
Canonical text rendering of grammar IR.

The output mirrors what the parser accepts, so for text already in
canonical layout ``serialize_grammar(parse_grammar(text)) == text``:

    grammar Name;
    rule:\tbody;  //comment
    multi:
    \t| first alternative
    \t| second alternative
    \t;
"""

from .ir import UNARY_OPERATORS, Ebnf, EbnfKind, Grammar, Production

DEFAULT_NEWLINE = "\r\n"


def escape_terminal(text: str) -> str:
    return text.replace("\\", "\\\\").replace("'", "\\'")


def serialize_ebnf(node: Ebnf, newline: str = DEFAULT_NEWLINE) -> str:
    """Render one expression node and its trailing comment/newline."""
    if node.kind == EbnfKind.TERMINAL:
        text = f"'{escape_terminal(node.text)}'"

    elif node.kind == EbnfKind.EXTENDED_TERMINAL:
        text = f"'<{escape_terminal(node.text)}>'"

    elif node.kind == EbnfKind.REFERENCE:
        text = node.text

    elif node.is_unary:
        child = node.children[0]
        inner = serialize_ebnf(child, newline)
        if child.is_composite:
            inner = f"( {inner} )"
        text = inner + UNARY_OPERATORS[node.kind]

    elif node.kind == EbnfKind.CHOICE:
        text = ""
        for i, child in enumerate(node.children):
            if i > 0:
                text += "| " if text.endswith("\t") else " | "
            text += serialize_ebnf(child, newline)

    else:
        text = ""
        for i, child in enumerate(node.children):
            if i > 0 and text and not text.endswith("\t"):
                text += " "
            if child.kind == EbnfKind.CHOICE:
                text += f"( {serialize_ebnf(child, newline)} )"
            else:
                text += serialize_ebnf(child, newline)

    if node.following_comment:
        text += f" //{node.following_comment}"
    # A comment runs to the end of its line
    if node.following_newline or node.following_comment:
        text += f"{newline}\t"
    return text


def serialize_production(production: Production, newline: str = DEFAULT_NEWLINE) -> str:
    """Render one production, including its line ending."""
    if production.body is None:
        if not production.comment:
            return newline
        return f"//{production.comment}{newline}"

    text = f"{production.name}:"
    if production.rule_starts_on_newline:
        text += newline
    text += "\t"
    if production.rule_starts_on_newline:
        text += "| "
    text += f"{serialize_ebnf(production.body, newline)};"
    if production.comment:
        text += f"  //{production.comment}"
    return text + newline


def serialize_grammar(grammar: Grammar) -> str:
    """Render a whole grammar using its recorded line ending."""
    newline = grammar.newline
    text = f"grammar {grammar.name};{newline}" if grammar.name else ""
    return text + "".join(serialize_production(p, newline) for p in grammar.productions)
