"""
Marker table for message markup

Defines the recognized marker tokens, their semantic kinds, and the two
marker sets the scanner switches between (full set and spoiler-nested set).
"""

from enum import Enum
from dataclasses import dataclass
from typing import Optional, Tuple


class MarkerKind(Enum):
    """
    Semantic kinds of message markup markers

    Leaf kinds (PRE, CODE) capture raw text; container kinds wrap child nodes.
    """
    PRE = "pre"                      # ```fenced block```
    CODE = "code"                    # `inline code`
    BOLD = "bold"                    # **bold**
    ITALIC = "italic"                # __italic__
    STRIKETHROUGH = "strikethrough"  # ~~strikethrough~~
    SPOILER = "spoiler"              # ||spoiler||

    @property
    def isLeaf(self) -> bool:
        """True for kinds whose content is never parsed for markers"""
        return self in (MarkerKind.PRE, MarkerKind.CODE)

    @property
    def isContainer(self) -> bool:
        """True for kinds that wrap child nodes"""
        return not self.isLeaf


@dataclass(frozen=True)
class MarkerSpec:
    """
    Specification for a single marker token

    Attributes:
        token: Exact string that opens and closes the span (e.g., "**")
        kind: Semantic kind of the span

    Example:
        MarkerSpec(token="||", kind=MarkerKind.SPOILER)
    """
    token: str
    kind: MarkerKind

    def matches(self, source: str, position: int) -> bool:
        """Check whether this marker's token starts at position in source"""
        return source.startswith(self.token, position)


# Order matters: ``` must be tested before ` so a fence is never read as
# three inline code markers.
MARKERS: Tuple[MarkerSpec, ...] = (
    MarkerSpec(token="```", kind=MarkerKind.PRE),
    MarkerSpec(token="`", kind=MarkerKind.CODE),
    MarkerSpec(token="**", kind=MarkerKind.BOLD),
    MarkerSpec(token="__", kind=MarkerKind.ITALIC),
    MarkerSpec(token="~~", kind=MarkerKind.STRIKETHROUGH),
    MarkerSpec(token="||", kind=MarkerKind.SPOILER),
)

# Allowed inside a spoiler body: the inline containers only
NESTED_MARKERS: Tuple[MarkerSpec, ...] = tuple(
    marker for marker in MARKERS if marker.kind.isContainer
)

NO_MARKERS: Tuple[MarkerSpec, ...] = ()


def marker_get(kind: MarkerKind) -> Optional[MarkerSpec]:
    """Look up the marker spec for a kind, or None if it has no marker"""
    for marker in MARKERS:
        if marker.kind is kind:
            return marker
    return None


def markers_forBody(kind: MarkerKind) -> Tuple[MarkerSpec, ...]:
    """
    Marker set used when scanning the body of a container

    Spoilers allow nested inline styling; bold, italic and strikethrough
    capture their body verbatim.

    Args:
        kind: Kind of the container being opened

    Returns:
        NESTED_MARKERS for spoilers, NO_MARKERS otherwise
    """
    if kind is MarkerKind.SPOILER:
        return NESTED_MARKERS
    return NO_MARKERS
