"""Core mdspec functionality: grammar notation, fuzzy location, spec reading and checking."""

from .checker import CheckResult, check_spec
from .config import GrammarConfig, MdspecConfig, SectionsConfig, load_config
from .diagnostics import Diagnostic, DiagnosticCode, Severity, SourceLocation, locate
from .document import SourceDocument
from .errors import ConfigError, ErrorContext, GrammarSyntaxError, MdspecError
from .grammar import Grammar, load_grammar, parse_grammar, serialize_grammar
from .span import Span
from .spec_reader import BookmarkCounter, ProductionRef, SectionRef, SpecDocument, read_spec

__all__ = [
    "BookmarkCounter",
    "CheckResult",
    "ConfigError",
    "Diagnostic",
    "DiagnosticCode",
    "ErrorContext",
    "Grammar",
    "GrammarConfig",
    "GrammarSyntaxError",
    "MdspecConfig",
    "MdspecError",
    "ProductionRef",
    "SectionRef",
    "SectionsConfig",
    "Severity",
    "SourceDocument",
    "SourceLocation",
    "Span",
    "SpecDocument",
    "check_spec",
    "load_config",
    "load_grammar",
    "locate",
    "parse_grammar",
    "read_spec",
    "serialize_grammar",
]
