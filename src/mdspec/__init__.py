"""
mdspec - grammar consistency checking for markdown language specifications.

Extracts grammar fragments embedded in markdown documents, compares them
with an authoritative grammar file, and reports differences with source
locations recovered by fuzzy matching.
"""

from ._version import get_version
from .core.checker import CheckResult, check_spec
from .core.errors import ConfigError, GrammarSyntaxError, MdspecError

__version__ = get_version()

__all__ = [
    "__version__",
    "CheckResult",
    "ConfigError",
    "GrammarSyntaxError",
    "MdspecError",
    "check_spec",
]
