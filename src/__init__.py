"""
msgmarkup - Inline message markup formatter

Turns constrained markdown-like chat message text into HTML fragments.
"""

__version__ = "1.0.0"

from .lib import (
    Parser,
    Serializer,
    markdown_parse,
    markdown_toHTML,
    text_extract,
    ast_toDicts,
    LOG,
    state_connectToLogger,
)

__all__ = [
    "Parser",
    "Serializer",
    "markdown_parse",
    "markdown_toHTML",
    "text_extract",
    "ast_toDicts",
    "LOG",
    "state_connectToLogger",
    "__version__",
]
