"""
Parser-specific data models

Type-safe structures for parser operations and return values.
"""

from dataclasses import dataclass
from typing import List

from .markers import MarkerSpec
from .nodes import ASTNode


@dataclass
class MarkerMatch:
    """
    Result of finding a marker token at the scan cursor

    Returned by Parser.marker_find() when one of the allowed markers starts
    at the current position. The closing position is looked up eagerly so the
    caller can decide between a span and literal text.

    Attributes:
        marker: The matched marker spec
        position: Character position of the opening token
        closing: Position of the next occurrence of the same token after the
                 opening one, or -1 when there is none

    Example:
        For source "a **b** c" at position 2:
        MarkerMatch(marker=<BOLD>, position=2, closing=5)
    """
    marker: MarkerSpec
    position: int
    closing: int

    @property
    def contentStart(self) -> int:
        """Index of the first character after the opening token"""
        return self.position + len(self.marker.token)

    @property
    def closed(self) -> bool:
        return self.closing != -1


@dataclass
class ParseResult:
    """
    Result of one scanner pass

    Returned by Parser.until_parse(). For a nested pass, index points just
    past the closing token; for the top-level pass it equals len(source).

    Attributes:
        nodes: Ordered nodes produced by the pass
        index: Position where scanning stopped

    Example:
        Parsing "**hi** there" from 2 with close token "**":
        ParseResult(nodes=[TextNode("hi")], index=6)
    """
    nodes: List[ASTNode]
    index: int
