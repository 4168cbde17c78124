"""
Serializer tests - AST to HTML, plain text and dicts

Covers the HTML mapping for each node kind, spoiler entity configuration,
optional Pygments highlighting, and the end-to-end markdown_toHTML helper.
"""

import json

import pytest

from msgmarkup.lib.parser import Parser
from msgmarkup.lib.serializer import Serializer, markdown_toHTML, text_extract, ast_toDicts
from msgmarkup.lib.lexer import MessageMarkupLexer
from msgmarkup.models.markers import MarkerKind
from msgmarkup.models.nodes import TextNode, CodeNode, PreNode, ContainerNode


SPOILER_OPEN = '<span data-entity-type="MessageEntitySpoiler">'


@pytest.fixture
def serializer():
    return Serializer(spoilerEntityType="MessageEntitySpoiler", highlight=False)


class TestNodeHTML:
    """Each node kind maps to its element"""

    def test_text_unchanged(self, serializer):
        """Text is emitted without escaping"""
        assert serializer.ast_serialize([TextNode("a < b & c")]) == "a < b & c"

    def test_code(self, serializer):
        assert serializer.ast_serialize([CodeNode("x")]) == "<code>x</code>"

    def test_pre_trimmed(self, serializer):
        html = serializer.ast_serialize([PreNode(content="\n  hi \n")])
        assert html == "<pre>hi</pre>"

    def test_pre_with_language(self, serializer):
        html = serializer.ast_serialize([PreNode(content="console.log(1)\n", language="js")])
        assert html == '<pre data-language="js">console.log(1)</pre>'

    @pytest.mark.parametrize("kind,tag", [
        (MarkerKind.BOLD, "b"),
        (MarkerKind.ITALIC, "i"),
        (MarkerKind.STRIKETHROUGH, "s"),
    ])
    def test_containers(self, serializer, kind, tag):
        node = ContainerNode(kind=kind, children=[TextNode("x")])
        assert serializer.ast_serialize([node]) == f"<{tag}>x</{tag}>"

    def test_spoiler(self, serializer):
        node = ContainerNode(kind=MarkerKind.SPOILER, children=[TextNode("x")])
        assert serializer.ast_serialize([node]) == f"{SPOILER_OPEN}x</span>"

    def test_custom_spoiler_entity(self):
        node = ContainerNode(kind=MarkerKind.SPOILER, children=[TextNode("x")])
        html = Serializer(spoilerEntityType="spoiler").ast_serialize([node])
        assert html == '<span data-entity-type="spoiler">x</span>'

    def test_leaf_kind_as_container_renders_children(self, serializer):
        """A container carrying a non-container kind is unwrapped"""
        node = ContainerNode(kind=MarkerKind.CODE, children=[TextNode("x"), TextNode("y")])
        assert serializer.ast_serialize([node]) == "xy"

    def test_empty_ast(self, serializer):
        assert serializer.ast_serialize([]) == ""

    def test_order_preserved(self, serializer):
        nodes = [TextNode("1"), CodeNode("2"), TextNode("3")]
        assert serializer.ast_serialize(nodes) == "1<code>2</code>3"


class TestMarkdownToHTML:
    """End-to-end parse and serialize"""

    @pytest.mark.parametrize("source", [
        "",
        "just text",
        "a * b _ c ~ d | e",
        "<p>raw &amp; html</p>",
    ])
    def test_marker_free_identity(self, source):
        """Input without markers comes back unchanged"""
        assert markdown_toHTML(source, Serializer(highlight=False)) == source

    @pytest.mark.parametrize("source", [
        "**bold",
        "****",
        "**line1\nline2**",
        "`a\nb`",
        "||  ||",
    ])
    def test_literal_fallback(self, source):
        assert markdown_toHTML(source, Serializer(highlight=False)) == source

    def test_fenced_with_language(self):
        html = markdown_toHTML("```js\nconsole.log(1)\n```", Serializer(highlight=False))
        assert html == '<pre data-language="js">console.log(1)</pre>'

    def test_fenced_without_language(self):
        assert markdown_toHTML("```\nhi\n```", Serializer(highlight=False)) == "<pre>hi</pre>"

    def test_fence_priority(self):
        assert markdown_toHTML("```code```", Serializer(highlight=False)) == "<pre>code</pre>"

    def test_spoiler_nesting(self, serializer):
        html = markdown_toHTML("||**bold**||", serializer)
        assert html == f"{SPOILER_OPEN}<b>bold</b></span>"

    def test_bold_does_not_recurse(self, serializer):
        assert markdown_toHTML("**a __b__ c**", serializer) == "<b>a __b__ c</b>"

    def test_mixed_message(self, serializer):
        source = "Hi **there**, see `cfg` and ~~old~~ __new__ ||spoiler **x**||"
        expected = (
            "Hi <b>there</b>, see <code>cfg</code> and <s>old</s> <i>new</i> "
            f"{SPOILER_OPEN}spoiler <b>x</b></span>"
        )
        assert markdown_toHTML(source, serializer) == expected

    def test_deterministic(self, serializer):
        source = "||__a__|| ```py\nb\n``` **c"
        assert markdown_toHTML(source, serializer) == markdown_toHTML(source, serializer)


class TestHighlighting:
    """Optional Pygments highlighting of tagged fenced blocks"""

    def test_disabled_by_flag(self):
        node = PreNode(content="def f(): pass\n", language="python")
        html = Serializer(highlight=False).ast_serialize([node])
        assert html == '<pre data-language="python">def f(): pass</pre>'

    def test_highlighted_python(self):
        node = PreNode(content="def f(): pass\n", language="python")
        html = Serializer(highlight=True).ast_serialize([node])
        assert html.startswith('<pre data-language="python">')
        assert html.endswith("</pre>")
        assert "<span" in html
        assert "style=" in html
        assert "f" in html

    def test_untagged_block_not_highlighted(self):
        node = PreNode(content="def f(): pass", language=None)
        html = Serializer(highlight=True).ast_serialize([node])
        assert html == "<pre>def f(): pass</pre>"

    def test_unknown_language_falls_back(self):
        """Unknown languages render as escaped plain text"""
        node = PreNode(content="a < b", language="nosuchlanguagexyz")
        html = Serializer(highlight=True).ast_serialize([node])
        assert html.startswith('<pre data-language="nosuchlanguagexyz">')
        assert "a &lt; b" in html

    def test_unknown_style_falls_back(self):
        """An unknown Pygments style renders with the default style"""
        source = "```py\nx = 1\n```"
        html = markdown_toHTML(source, Serializer(highlight=True, pygmentsStyle="nosuchstyle"))
        expected = markdown_toHTML(source, Serializer(highlight=True, pygmentsStyle="default"))
        assert html == expected
        assert html.startswith('<pre data-language="py">')

    def test_named_style_used(self):
        node = PreNode(content="def f(): pass", language="python")
        html = Serializer(highlight=True, pygmentsStyle="monokai").ast_serialize([node])
        assert html.startswith('<pre data-language="python">')
        assert "<span" in html

    def test_markup_language_uses_bundled_lexer(self):
        node = PreNode(content="**bold** ||s||", language="msgmarkup")
        html = Serializer(highlight=True).ast_serialize([node])
        assert "<span" in html
        assert "bold" in html


class TestLexer:
    """MessageMarkupLexer token stream"""

    def test_tokens_roundtrip_text(self):
        """Concatenated token values reproduce the source"""
        source = "a **b** `c` ||d||\n"
        values = "".join(value for _, value in MessageMarkupLexer().get_tokens(source))
        assert values == source

    def test_markers_tokenized(self):
        from pygments.token import Generic, Keyword

        tokens = list(MessageMarkupLexer().get_tokens("**b** ||s||"))
        assert (Generic.Strong, "**") in tokens
        assert (Keyword, "||") in tokens


class TestPlainTextAndDicts:
    """text_extract and ast_toDicts"""

    def test_text_extract(self):
        nodes = Parser("a **b** ||c __d__|| `e` ```py\n f \n```").parse()
        assert text_extract(nodes) == "a b c d e f"

    def test_text_extract_keeps_literal_markers(self):
        assert text_extract(Parser("**open").parse()) == "**open"

    def test_ast_toDicts(self):
        nodes = Parser("||**a**|| `b` ```js\nc\n```").parse()
        assert ast_toDicts(nodes) == [
            {"type": "spoiler", "children": [
                {"type": "bold", "children": [{"type": "text", "content": "a"}]},
            ]},
            {"type": "text", "content": " "},
            {"type": "code", "content": "b"},
            {"type": "text", "content": " "},
            {"type": "pre", "content": "c\n", "language": "js"},
        ]

    def test_ast_toDicts_is_json_ready(self):
        nodes = Parser("~~x~~ ```\ny\n```").parse()
        assert json.loads(json.dumps(ast_toDicts(nodes))) == ast_toDicts(nodes)
