#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Integration tests for the full sanitize, parse and convert pipeline."""

import subprocess
import sys

import pytest

from html_injector import HtmlInjector, InjectorOptions, convert, find_all, find_first, iter_elements, text_content
from html_injector.ast import ElementNode, collect_keys, node_to_json
from html_injector.attributes import is_handler_attribute
from html_injector.renderers import render_html


def _all_prop_names(tree):
    return [name for element in iter_elements(tree) for name in element.props]


def _nested(depth, tag="div", text="x"):
    return f"<{tag}>" * depth + text + f"</{tag}>" * depth


@pytest.mark.integration
class TestPipelineBehaviour:
    """End-to-end conversion behaviour."""

    @pytest.mark.parametrize("markup", ["", "   ", "\t\n  ", None, 0, {"html": "<p>"}])
    def test_no_content(self, markup):
        """Empty, whitespace-only and non-string inputs give no content."""
        assert convert(markup) is None

    def test_paragraph_with_class_style_and_nesting(self):
        """Class, style and nested elements are converted."""
        tree = convert('<p class="c" style="color: red; font-size: 16px;">Hello <strong>World</strong></p>')

        (paragraph,) = tree.children
        assert paragraph.tag == "p"
        assert paragraph.class_name == "c"
        assert dict(paragraph.style) == {"color": "red", "fontSize": "16px"}
        assert text_content(paragraph) == "Hello World"
        assert find_first(paragraph, "strong") is not None

    def test_kebab_case_styles_become_camel_case(self):
        """CSS property names are camelCased."""
        tree = convert(
            '<div style="background-color: blue; font-size: 14px; margin-top: 10px; border-radius: 5px;">Test</div>'
        )
        style = dict(tree.children[0].style)
        assert style == {"backgroundColor": "blue", "fontSize": "14px", "marginTop": "10px", "borderRadius": "5px"}

    @pytest.mark.parametrize("sanitize", [True, False])
    def test_event_handlers_never_reach_output(self, sanitize):
        """Handlers are dropped with and without the sanitizer."""
        markup = (
            "<button onclick=\"alert('XSS')\" onmouseover=\"console.log('hover')\" class=\"btn\">Click me</button>"
        )
        tree = convert(markup, InjectorOptions(sanitize=sanitize))

        (button,) = find_all(tree, "button")
        assert button.class_name == "btn"
        assert text_content(button) == "Click me"
        assert not any(is_handler_attribute(name) for name in _all_prop_names(tree))

    def test_class_names_kept_whole(self):
        """Multiple classes stay one space-separated string."""
        tree = convert('<div class="my-class another-class">Content</div>')
        assert tree.children[0].class_name == "my-class another-class"

    def test_style_is_never_a_string(self):
        """Every style property is a mapping."""
        tree = convert('<div style="color: red"><span style="">x</span><b style=";;">y</b></div>')
        for element in iter_elements(tree):
            if "style" in element.props:
                assert not isinstance(element.props["style"], str)

    def test_identifiers_are_distinct(self):
        """Every element of the tree has its own identifier."""
        tree = convert("<ul><li>a</li><li>b<ul><li>c</li></ul></li></ul><p>d <em>e</em></p>")
        keys = collect_keys(tree)
        assert len(keys) == len(set(keys))
        assert keys[1:] == list(range(len(keys) - 1))
        assert tree.key == len(keys) - 1

    def test_table_repair(self):
        """Missing table sections are inserted the way a browser does."""
        tree = convert("<table><tr><td>1</td></tr></table>")
        assert [element.tag for element in iter_elements(tree)] == ["div", "table", "tbody", "tr", "td"]

    def test_whitespace_is_collapsed(self):
        """Whitespace runs collapse before parsing."""
        tree = convert("\n  <p>\n   Hello\n\n   world  </p>  \n")
        assert text_content(tree) == " Hello world "

    def test_form_content_is_kept(self):
        """Form wrappers are removed but the content inside them survives."""
        tree = convert("<form><p>Important text</p></form><p>after</p>")

        assert find_first(tree, "form") is None
        assert [paragraph.tag for paragraph in tree.children] == ["p", "p"]
        assert text_content(tree) == "Important textafter"

    def test_inputs_do_not_swallow_siblings(self):
        """Dropping an input leaves the surrounding text in place."""
        tree = convert('<label>Name <input type="text" name="n"> required</label>')
        assert find_first(tree, "input") is None
        assert text_content(tree) == "Name  required"

    def test_script_payload_only(self):
        """Markup made only of dangerous content gives no content."""
        assert convert("<script>alert(document.cookie)</script>") is None

    def test_injector_is_reusable(self):
        """One injector converts many inputs independently."""
        injector = HtmlInjector(InjectorOptions(html_parser="html.parser"))
        first = injector.convert("<p><b>a</b></p>")
        second = injector.convert("<i>b</i>")
        assert collect_keys(first) == [2, 0, 1]
        assert collect_keys(second) == [1, 0]


@pytest.mark.integration
class TestMalformedMarkup:
    """Malformed markup never raises."""

    @pytest.mark.parametrize(
        "markup",
        [
            "<div><p>Unclosed paragraph</div>",
            '<div class="test><p>Missing quote</p></div>',
            "<div><span>Nested <div>block in inline</div></span></div>",
            '<img src="test.jpg" alt="test"',
            "<div><p>Text</p><span>More text</div>",
            '<div style="color: red; background-color:">Incomplete style</div>',
            "<div><p>Text<strong>Bold</p></strong></div>",
            "<<<>>>",
            "</p>",
            "<p>a</b></i></p>",
        ],
    )
    @pytest.mark.parametrize("parser", ["html5lib", "html.parser"])
    def test_never_raises(self, markup, parser):
        """The result is either no content or a container element."""
        result = convert(markup, InjectorOptions(html_parser=parser))
        assert result is None or isinstance(result, ElementNode)

    def test_unclosed_paragraph(self):
        """Unclosed elements keep their text."""
        tree = convert("<div><p>Unclosed paragraph</div>")
        assert text_content(tree) == "Unclosed paragraph"
        assert find_first(tree, "p") is not None

    def test_block_in_inline(self):
        """Block elements inside inline ones keep their text."""
        tree = convert("<div><span>Nested <div>block in inline</div></span></div>")
        assert text_content(tree) == "Nested block in inline"

    def test_misnested_tags(self):
        """Misnested closing tags are repaired."""
        tree = convert("<div><p>Text<strong>Bold</p></strong></div>")
        assert text_content(tree) == "TextBold"

    def test_incomplete_style(self):
        """An incomplete declaration is dropped and the rest kept."""
        tree = convert('<div style="color: red; background-color:">Incomplete style</div>')
        style = dict(tree.children[0].style)
        assert style.get("color") == "red"
        assert "backgroundColor" not in style


@pytest.mark.integration
class TestMalformedStyles:
    """Malformed inline styles never raise and only valid entries remain."""

    @pytest.mark.parametrize(
        "style,expected",
        [
            ("color:; background-color: blue;", {"backgroundColor": "blue"}),
            (":red; font-size: 14px;", {"fontSize": "14px"}),
            ("color red; background: blue;", {"background": "blue"}),
            ("color:; background-color:; font-size:;", {}),
            (";;;;", {}),
            ("color: red;; background: blue;", {"color": "red", "background": "blue"}),
            ("color: red; ; background: blue;", {"color": "red", "background": "blue"}),
            ("margin-top", {}),
            ("color: red; background-color", {"color": "red"}),
        ],
    )
    def test_without_sanitizer(self, style, expected):
        """The style parser alone keeps exactly the valid declarations."""
        tree = convert(f'<div style="{style}">x</div>', InjectorOptions(sanitize=False))
        (div,) = tree.children
        assert dict(div.style) == expected

    @pytest.mark.parametrize(
        "style",
        [
            "color:; background-color: blue;",
            ":red; font-size: 14px;",
            "color red; background: blue;",
            "color:; background-color:; font-size:;",
            ";;;;",
            "margin-top",
            "color: red; background-color",
        ],
    )
    def test_with_sanitizer(self, style):
        """After sanitization every remaining declaration is complete."""
        tree = convert(f'<div style="{style}">x</div>')
        (div,) = find_all(tree, "div")[1:]
        for name, value in div.style.items():
            assert name and "-" not in name
            assert value and value == value.strip()


@pytest.mark.integration
@pytest.mark.cli
class TestModuleEntryPoint:
    """Test ``python -m html_injector``."""

    def test_module_execution(self):
        """The package runs as a module and reads standard input."""
        result = subprocess.run(
            [sys.executable, "-m", "html_injector", "--format", "html"],
            input='<p onclick="x()" class="a">Hi</p>',
            capture_output=True,
            text=True,
            timeout=60,
        )
        assert result.returncode == 0
        assert result.stdout.strip() == '<div><p class="a">Hi</p></div>'

    def test_module_no_content(self):
        """No content exits with status 1."""
        result = subprocess.run(
            [sys.executable, "-m", "html_injector"],
            input="   ",
            capture_output=True,
            text=True,
            timeout=60,
        )
        assert result.returncode == 1
        assert result.stdout == ""


@pytest.mark.integration
class TestDeepNesting:
    """Deeply nested markup converts, inspects, renders and serializes without hitting the recursion limit."""

    DEPTH = 2000

    @pytest.fixture(scope="class")
    def deep_tree(self):
        return convert(_nested(self.DEPTH))

    def test_converts(self, deep_tree):
        """Every nested element is kept."""
        assert isinstance(deep_tree, ElementNode)
        assert sum(1 for _ in iter_elements(deep_tree)) == self.DEPTH + 1

    def test_text_content(self, deep_tree):
        """The innermost text is reachable."""
        assert text_content(deep_tree) == "x"

    def test_keys_in_preorder(self, deep_tree):
        """Identifiers follow document order and the container takes the final count."""
        assert collect_keys(deep_tree) == [self.DEPTH, *range(self.DEPTH)]

    def test_render_html(self, deep_tree):
        """The tree renders back to the same nesting."""
        assert render_html(deep_tree) == _nested(self.DEPTH + 1)

    def test_node_to_json(self, deep_tree):
        """The tree serializes to compact JSON."""
        serialized = node_to_json(deep_tree)
        assert serialized.startswith('{"type": "element", "tag": "div", "key": 2000, "props": {}, "children": [')
        assert serialized.count('"type": "element"') == self.DEPTH + 1
        assert serialized.endswith('{"type": "text", "content": "x"}' + "]}" * (self.DEPTH + 1))

    @pytest.mark.parametrize("parser", ["html5lib", "html.parser"])
    def test_both_parsers(self, parser):
        """Both tree builders handle deep nesting."""
        tree = convert(_nested(self.DEPTH, tag="span"), InjectorOptions(html_parser=parser))
        assert [element.key for element in find_all(tree, "span")][:3] == [0, 1, 2]
        assert len(find_all(tree, "span")) == self.DEPTH

    def test_without_sanitizer(self):
        """The parse and convert stages alone handle deep nesting."""
        tree = convert(_nested(self.DEPTH, tag="span"), InjectorOptions(sanitize=False))
        assert text_content(tree) == "x"
        assert tree.key == self.DEPTH

    @pytest.mark.cli
    @pytest.mark.parametrize(
        "args,expected_end",
        [
            (["--indent", "0"], '{"type": "text", "content": "x"}' + "]}" * 2001 + "\n"),
            (["-f", "html"], "x" + "</div>" * 2001 + "\n"),
        ],
    )
    def test_cli(self, tmp_path, args, expected_end):
        """The command line prints deep trees in both formats."""
        path = tmp_path / "deep.html"
        path.write_text(_nested(self.DEPTH), encoding="utf-8")

        result = subprocess.run(
            [sys.executable, "-m", "html_injector", str(path), *args],
            capture_output=True,
            text=True,
            timeout=120,
        )
        assert result.returncode == 0, result.stderr
        assert result.stdout.endswith(expected_end)
