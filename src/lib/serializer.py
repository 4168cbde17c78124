"""
Serializer for message markup AST

Transforms parsed AST nodes into an HTML fragment, plain text, or JSON-ready
dicts. All transforms are pure and order-preserving.

HTML mapping:
    TextNode                 → content, unescaped
    CodeNode                 → <code>content</code>
    PreNode                  → <pre>trimmed</pre> / <pre data-language="x">trimmed</pre>
    ContainerNode(BOLD)      → <b>…</b>
    ContainerNode(ITALIC)    → <i>…</i>
    ContainerNode(STRIKE…)   → <s>…</s>
    ContainerNode(SPOILER)   → <span data-entity-type="MessageEntitySpoiler">…</span>
"""

from typing import Any, Dict, List, Optional

from ..models.markers import MarkerKind
from ..models.nodes import ASTNode, TextNode, CodeNode, PreNode, ContainerNode
from .log import LOG


CONTAINER_TAGS: Dict[MarkerKind, str] = {
    MarkerKind.BOLD: 'b',
    MarkerKind.ITALIC: 'i',
    MarkerKind.STRIKETHROUGH: 's',
}


class Serializer:
    """
    Serializes message markup AST to HTML

    Responsibilities:
    - Wrap containers in their kind-specific element
    - Emit inline code and fenced blocks
    - Optionally highlight fenced blocks that carry a language tag
    """

    def __init__(
        self,
        spoilerEntityType: Optional[str] = None,
        highlight: Optional[bool] = None,
        pygmentsStyle: Optional[str] = None,
    ) -> None:
        """
        Initialize serializer

        Unset arguments fall back to appsettings.

        Args:
            spoilerEntityType: data-entity-type value for spoiler spans
            highlight: Highlight fenced blocks with a language tag
            pygmentsStyle: Pygments style name used when highlighting
        """
        from ..config import appsettings

        self.spoilerEntityType = (
            spoilerEntityType if spoilerEntityType is not None
            else appsettings.spoiler_entity_type
        )
        self.highlight = highlight if highlight is not None else appsettings.highlight_code
        self.pygmentsStyle = pygmentsStyle or appsettings.pygments_style

    def ast_serialize(self, nodes: List[ASTNode]) -> str:
        """
        Serialize a node list to an HTML fragment

        Args:
            nodes: Ordered AST nodes

        Returns:
            Concatenated HTML of every node, in order
        """
        return ''.join(self.node_serialize(node) for node in nodes)

    def node_serialize(self, node: ASTNode) -> str:
        """
        Serialize a single node

        Args:
            node: AST node

        Returns:
            HTML for this node (containers recurse into their children)
        """
        if isinstance(node, TextNode):
            return node.content
        if isinstance(node, CodeNode):
            return f'<code>{node.content}</code>'
        if isinstance(node, PreNode):
            return self.pre_serialize(node)
        return self.container_serialize(node)

    def pre_serialize(self, node: PreNode) -> str:
        """Render a fenced block, trimming its content"""
        content = node.content.strip()
        if not node.language:
            return f'<pre>{content}</pre>'
        if self.highlight:
            content = self.code_highlight(content, node.language)
        return f'<pre data-language="{node.language}">{content}</pre>'

    def container_serialize(self, node: ContainerNode) -> str:
        """Render a container around its serialized children"""
        content = self.ast_serialize(node.children)

        if node.kind is MarkerKind.SPOILER:
            return f'<span data-entity-type="{self.spoilerEntityType}">{content}</span>'

        tag = CONTAINER_TAGS.get(node.kind)
        if tag is None:
            # Unreachable for parser output: only container kinds get here
            return content
        return f'<{tag}>{content}</{tag}>'

    def code_highlight(self, content: str, language: str) -> str:
        """
        Highlight fenced block content with Pygments

        Unknown languages fall back to plain text and unknown styles to
        "default"; "msgmarkup" / "markup" use the bundled MessageMarkupLexer.

        Args:
            content: Trimmed block content
            language: Language tag from the fence

        Returns:
            Highlighted HTML with inline styles and no wrapping element
        """
        from pygments import highlight
        from pygments.lexers import get_lexer_by_name, TextLexer
        from pygments.lexer import Lexer
        from pygments.formatters import HtmlFormatter
        from pygments.util import ClassNotFound
        from .lexer import MessageMarkupLexer

        lexer: Lexer
        try:
            if language.lower() in ['msgmarkup', 'markup']:
                lexer = MessageMarkupLexer()
            else:
                lexer = get_lexer_by_name(language)
        except ClassNotFound:
            LOG(f"No lexer for '{language}', using plain text", level=2)
            lexer = TextLexer()

        formatter = HtmlFormatter(style=self.style_get(), noclasses=True, nowrap=True)
        return highlight(content, lexer, formatter).rstrip('\n')

    def style_get(self) -> Any:
        """Resolve the Pygments style, falling back to "default" if unknown"""
        from pygments.styles import get_style_by_name
        from pygments.util import ClassNotFound

        try:
            return get_style_by_name(self.pygmentsStyle)
        except ClassNotFound:
            LOG(f"No Pygments style '{self.pygmentsStyle}', using default", level=2)
            return get_style_by_name("default")


def text_extract(nodes: List[ASTNode]) -> str:
    """
    Flatten an AST to plain text with all formatting removed

    Fenced block content is trimmed the same way the HTML serializer trims it.

    Example:
        >>> text_extract(Parser("a **b** ||c||").parse())
        'a b c'
    """
    parts = []
    for node in nodes:
        if isinstance(node, ContainerNode):
            parts.append(text_extract(node.children))
        elif isinstance(node, PreNode):
            parts.append(node.content.strip())
        else:
            parts.append(node.content)
    return ''.join(parts)


def ast_toDicts(nodes: List[ASTNode]) -> List[Dict[str, Any]]:
    """
    Convert an AST to JSON-ready nested dicts

    Example:
        >>> ast_toDicts(Parser("**hi**").parse())
        [{'type': 'bold', 'children': [{'type': 'text', 'content': 'hi'}]}]
    """
    result: List[Dict[str, Any]] = []
    for node in nodes:
        if isinstance(node, ContainerNode):
            result.append({'type': node.kind.value, 'children': ast_toDicts(node.children)})
        elif isinstance(node, PreNode):
            result.append({'type': 'pre', 'content': node.content, 'language': node.language})
        elif isinstance(node, CodeNode):
            result.append({'type': 'code', 'content': node.content})
        else:
            result.append({'type': 'text', 'content': node.content})
    return result


def markdown_toHTML(source: str, serializer: Optional[Serializer] = None) -> str:
    """
    Parse message text and serialize it to an HTML fragment

    Args:
        source: Raw message text
        serializer: Serializer to use (default: one built from appsettings)

    Returns:
        HTML fragment; "" for empty input

    Example:
        >>> markdown_toHTML("```js\\nconsole.log(1)\\n```")
        '<pre data-language="js">console.log(1)</pre>'
    """
    from .parser import Parser

    nodes = Parser(source).parse()
    return (serializer or Serializer()).ast_serialize(nodes)
