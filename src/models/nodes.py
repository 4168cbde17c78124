"""
AST node types for message markup

The node set is closed: three leaf kinds (text, inline code, fenced block)
and one container kind carrying a MarkerKind. Nodes are frozen once built.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Union

from .markers import MarkerKind


@dataclass(frozen=True)
class TextNode:
    """
    Plain text run, rendered verbatim

    Attributes:
        content: Literal text, including any markers that failed to close
    """
    content: str


@dataclass(frozen=True)
class CodeNode:
    """
    Inline code span

    Attributes:
        content: Raw text between the backticks, never parsed for markers
    """
    content: str


@dataclass(frozen=True)
class PreNode:
    """
    Fenced code block

    Attributes:
        content: Raw block text, untrimmed (trimming happens at render time)
        language: Language tag from the opening fence line, if any

    Example:
        For source "```js\\nconsole.log(1)\\n```":
        PreNode(content="console.log(1)\\n", language="js")
    """
    content: str
    language: Optional[str] = None


@dataclass(frozen=True)
class ContainerNode:
    """
    Formatting span wrapping child nodes

    Attributes:
        kind: One of BOLD, ITALIC, STRIKETHROUGH, SPOILER
        children: Ordered child nodes

    Example:
        For source "||**hi**||":
        ContainerNode(
            kind=MarkerKind.SPOILER,
            children=[ContainerNode(kind=MarkerKind.BOLD, children=[TextNode("hi")])]
        )
    """
    kind: MarkerKind
    children: List['ASTNode'] = field(default_factory=list)


ASTNode = Union[TextNode, CodeNode, PreNode, ContainerNode]
