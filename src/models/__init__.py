"""
Models package for msgmarkup

Contains data structures and type definitions for the formatting pipeline.
"""

from .state import ProgramState, pipeline
from .markers import MarkerKind, MarkerSpec, MARKERS, NESTED_MARKERS, NO_MARKERS, marker_get
from .nodes import ASTNode, TextNode, CodeNode, PreNode, ContainerNode
from .parser import MarkerMatch, ParseResult

__all__ = [
    "ProgramState",
    "pipeline",
    "MarkerKind",
    "MarkerSpec",
    "MARKERS",
    "NESTED_MARKERS",
    "NO_MARKERS",
    "marker_get",
    "ASTNode",
    "TextNode",
    "CodeNode",
    "PreNode",
    "ContainerNode",
    "MarkerMatch",
    "ParseResult",
]
