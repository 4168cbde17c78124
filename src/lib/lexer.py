"""
Custom Pygments lexer for message markup

Provides syntax highlighting for message markup source when it is shown
inside a fenced block tagged ```msgmarkup.

Token types:
- String.Backtick: Fence and inline-code markers
- String: Fenced / inline code content
- Generic.Strong: **bold** markers
- Generic.Emph: __italic__ markers
- Generic.Deleted: ~~strikethrough~~ markers
- Keyword: ||spoiler|| markers
- Text: Everything else
"""

from pygments.lexer import RegexLexer, bygroups
from pygments.token import (
    Text,
    String,
    Keyword,
    Generic,
)


class MessageMarkupLexer(RegexLexer):
    """
    Lexer for message markup

    Example:
        Hello **world** and ||`secret`||

    Tokens:
        ** → Generic.Strong
        world → Text
        || → Keyword
        ` → String.Backtick
        secret → String
    """

    name = 'Message markup'
    aliases = ['msgmarkup', 'markup']
    filenames = ['*.msg']

    tokens = {
        'root': [
            # Fenced block with optional language tag
            (r'(```)(\w+\n)?([\s\S]+?)(```)',
             bygroups(String.Backtick, Keyword.Type, String, String.Backtick)),

            # Inline code
            (r'(`)([^`\n]+)(`)', bygroups(String.Backtick, String, String.Backtick)),

            (r'\*\*', Generic.Strong),
            (r'__', Generic.Emph),
            (r'~~', Generic.Deleted),
            (r'\|\|', Keyword),

            # Runs without any marker character
            (r'[^`*_~|]+', Text),
            (r'.', Text),
        ],
    }

