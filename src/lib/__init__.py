"""
msgmarkup - Inline message markup formatter

Parses chat-message markup (bold, italic, strikethrough, spoiler, inline code,
fenced blocks) into an AST and serializes it to HTML.
"""

__version__ = "1.0.0"

from .parser import Parser, markdown_parse
from .serializer import Serializer, markdown_toHTML, text_extract, ast_toDicts
from .lexer import MessageMarkupLexer
from .log import LOG, state_connectToLogger

__all__ = [
    "Parser",
    "markdown_parse",
    "Serializer",
    "markdown_toHTML",
    "text_extract",
    "ast_toDicts",
    "MessageMarkupLexer",
    "LOG",
    "state_connectToLogger",
    "__version__",
]
