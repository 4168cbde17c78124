"""
Parser for message markup

Transforms constrained markdown-like message text into an abstract syntax
tree (AST).

Recognized markers (in priority order):
    ```fenced block```   `inline code`   **bold**   __italic__
    ~~strikethrough~~    ||spoiler||

Key features:
- Recursive descent over a single cursor, one pass per container
- Spoilers nest the inline containers; bold, italic and strikethrough
  capture their body verbatim
- Unterminated, empty, or line-spanning markers degrade to literal text
- Never raises: every string parses

Example:
    >>> nodes = Parser("||**hi**||").parse()
    >>> nodes[0].kind
    <MarkerKind.SPOILER: 'spoiler'>
    >>> nodes[0].children[0].children[0].content
    'hi'
"""

import re
from typing import List, Optional, Sequence

from ..models.markers import MarkerKind, MarkerSpec, MARKERS, markers_forBody
from ..models.nodes import ASTNode, TextNode, CodeNode, PreNode, ContainerNode
from ..models.parser import MarkerMatch, ParseResult
from .log import LOG


NEWLINE_PATTERN = re.compile(r'\r?\n')
LANGUAGE_PATTERN = re.compile(r'^\w+$')


def content_isDegenerate(content: str, kind: MarkerKind) -> bool:
    """
    Check whether a candidate span interior must fall back to literal text

    Args:
        content: Text between an opening token and its candidate close
        kind: Kind of the marker being opened

    Returns:
        True if content is empty or whitespace-only, or (for any kind other
        than PRE) spans a line break
    """
    if not content.strip():
        return True
    if kind is not MarkerKind.PRE and NEWLINE_PATTERN.search(content):
        return True
    return False


class Parser:
    """
    Recursive descent parser for message markup

    Handles:
    - Fenced blocks with optional language tag
    - Inline code spans
    - Bold / italic / strikethrough containers (verbatim bodies)
    - Spoiler containers (bodies may nest the inline containers)
    - Literal fallback for markers without a valid close
    """

    def __init__(self, source: str, debug: bool = False):
        """
        Initialize parser with source text

        Args:
            source: Raw message text
            debug: Trace marker decisions through the logger regardless of
                   the connected verbosity

        Attributes:
            source: Source text being parsed
            debug: Debug mode flag
        """
        from ..config import appsettings

        self.source = source
        self.debug = debug or appsettings.debug_mode

    def parse(self) -> List[ASTNode]:
        """
        Parse the whole source into an AST

        Returns:
            Ordered list of top-level nodes. Empty source gives an empty list.

        Example:
            >>> Parser("a **b** c").parse()
            [TextNode(content='a '), ContainerNode(kind=<MarkerKind.BOLD: 'bold'>, children=[TextNode(content='b')]), TextNode(content=' c')]
        """
        result = self.until_parse(None, 0, MARKERS)
        LOG(f"Parsed {len(result.nodes)} top-level nodes", level=2)
        return result.nodes

    def until_parse(
        self,
        closeToken: Optional[str],
        startIndex: int,
        allowedMarkers: Sequence[MarkerSpec],
    ) -> ParseResult:
        """
        Scan from startIndex until closeToken (or end of input)

        Core scanner loop:
        1. If closeToken matches at the cursor, flush text and return
        2. Otherwise try each allowed marker in table order
        3. A marker with no valid close is kept as literal text
        4. A valid leaf marker becomes a CodeNode/PreNode
        5. A valid container marker recurses with its body marker set
        6. Anything else is accumulated as plain text

        Args:
            closeToken: Token ending this pass, or None at top level
            startIndex: Position to start scanning from
            allowedMarkers: Markers recognized during this pass

        Returns:
            ParseResult with the produced nodes and the index just past the
            close token (or len(source) when input ran out)
        """
        source = self.source
        nodes: List[ASTNode] = []
        text: List[str] = []
        i = startIndex

        def text_flush() -> None:
            if text:
                nodes.append(TextNode(content=''.join(text)))
                text.clear()

        while i < len(source):
            if closeToken and source.startswith(closeToken, i):
                text_flush()
                return ParseResult(nodes=nodes, index=i + len(closeToken))

            match = self.marker_find(i, allowedMarkers)
            if match is None:
                text.append(source[i])
                i += 1
                continue

            marker = match.marker
            if not self.match_isValid(match):
                self.trace(f"{marker.kind.name} at {i} kept as literal text")
                text.append(marker.token)
                i += len(marker.token)
                continue

            text_flush()
            self.trace(f"{marker.kind.name} at {i} closes at {match.closing}")

            if marker.kind is MarkerKind.PRE:
                nodes.append(self.preformatted_parse(match))
                i = match.closing + len(marker.token)
            elif marker.kind is MarkerKind.CODE:
                nodes.append(CodeNode(content=source[match.contentStart:match.closing]))
                i = match.closing + len(marker.token)
            else:
                body = self.until_parse(
                    marker.token,
                    match.contentStart,
                    markers_forBody(marker.kind),
                )
                nodes.append(ContainerNode(kind=marker.kind, children=body.nodes))
                i = body.index

        text_flush()
        return ParseResult(nodes=nodes, index=i)

    def marker_find(
        self, position: int, allowedMarkers: Sequence[MarkerSpec]
    ) -> Optional[MarkerMatch]:
        """
        Find the first allowed marker starting at position

        Markers are tried in table order, so "```" wins over "`".

        Args:
            position: Cursor position in source
            allowedMarkers: Markers recognized in the current pass

        Returns:
            MarkerMatch with the candidate closing position, or None
        """
        for marker in allowedMarkers:
            if marker.matches(self.source, position):
                return MarkerMatch(
                    marker=marker,
                    position=position,
                    closing=self.closingMarker_find(marker, position),
                )
        return None

    def closingMarker_find(self, marker: MarkerSpec, position: int) -> int:
        """
        Find the next occurrence of a marker's token after its opening token

        Args:
            marker: Marker opened at position
            position: Position of the opening token

        Returns:
            Position of the closing token, or -1 if there is none
        """
        return self.source.find(marker.token, position + len(marker.token))

    def match_isValid(self, match: MarkerMatch) -> bool:
        """True if the match has a close and a non-degenerate interior"""
        if not match.closed:
            return False
        content = self.source[match.contentStart:match.closing]
        return not content_isDegenerate(content, match.marker.kind)

    def preformatted_parse(self, match: MarkerMatch) -> PreNode:
        """
        Build a PreNode for a fenced block

        A language tag is taken from the opening fence line when a newline
        occurs before the closing fence and the text up to that newline is a
        single word. Content is left untrimmed.

        Args:
            match: Valid PRE match

        Returns:
            PreNode with raw content and optional language

        Example:
            For source "```py\\nx = 1\\n```":
            PreNode(content="x = 1\\n", language="py")
        """
        contentStart = match.contentStart
        language = None

        newline = self.source.find('\n', contentStart)
        if newline != -1 and newline < match.closing:
            candidate = self.source[contentStart:newline].strip()
            if LANGUAGE_PATTERN.match(candidate):
                language = candidate
                contentStart = newline + 1

        return PreNode(
            content=self.source[contentStart:match.closing],
            language=language,
        )

    def trace(self, message: str) -> None:
        """Emit a parser trace line at verbosity 3 (or always in debug mode)"""
        LOG(message, level=3, force=self.debug)


def markdown_parse(source: str) -> List[ASTNode]:
    """Parse message text into an AST"""
    return Parser(source).parse()

