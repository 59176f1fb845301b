"""Tests for the HTML sanitizer and text-safety helpers."""

import pytest

from afriwiki.errors import MalformedInput
from afriwiki.processors.sanitizer import escape_html, sanitize_html, sanitize_input


def test_script_and_event_handler_removed():
    result = sanitize_html('<script>alert(1)</script><p onclick="x()">hi</p>')
    assert result == "<p>hi</p>"


def test_javascript_href_neutralised():
    assert sanitize_html('<a href="javascript:alert(1)">x</a>') == '<a href="#">x</a>'
    assert sanitize_html('<a href=" JaVa\tScRiPt:alert(1)">x</a>') == '<a href="#">x</a>'


def test_javascript_src_emptied():
    assert sanitize_html('<img src="javascript:alert(1)">') == '<img src="">'


def test_data_uri_only_for_images():
    assert sanitize_html('<img src="data:text/html;base64,PHNjcmlwdD4=">') == '<img src="">'
    safe = '<img src="data:image/png;base64,iVBORw0KGgo=">'
    assert sanitize_html(safe) == safe


@pytest.mark.parametrize(
    "html",
    [
        '<iframe src="https://evil.example">inner</iframe>',
        "<object data='x.swf'><param name='a' value='b'></object>",
        '<embed src="x.swf">',
        '<form action="/steal"><input name="pw"><button>Go</button></form>',
        "<textarea>secret</textarea>",
        "<style>body { display: none }</style>",
        '<meta http-equiv="refresh" content="0;url=https://evil.example">',
        '<link rel="stylesheet" href="https://evil.example/x.css">',
        '<base href="https://evil.example/">',
    ],
)
def test_dangerous_elements_removed(html):
    assert sanitize_html(f"<p>a</p>{html}<p>b</p>") == "<p>a</p><p>b</p>"


def test_css_expression_stripped():
    result = sanitize_html('<p style="width: expression(alert(1)); color: red">t</p>')
    assert "expression" not in result
    assert "color: red" in result


def test_text_and_entities_preserved():
    html = '<p class="lead">Tom &amp; Jerry &#39;quoted&#39; <strong>bold</strong></p>'
    assert sanitize_html(html) == html


def test_comments_removed():
    assert sanitize_html("<p>a<!-- [if IE]><script>x</script><![endif] -->b</p>") == "<p>ab</p>"


def test_tags_cannot_be_reassembled():
    result = sanitize_html("<<script>x</script>img src=x onerror=alert(1)>")
    assert "<img" not in result
    assert "&lt;img" in result


def test_max_length_truncates_before_sanitizing():
    assert sanitize_html("abcdefgh", max_length=3) == "abc..."
    result = sanitize_html('<p>hello</p><img src="x" onerror="y">', max_length=20)
    assert "onerror" not in result
    assert result.startswith("<p>hello</p>")


def test_empty_and_none():
    assert sanitize_html("") == ""
    assert sanitize_html(None) == ""


def test_non_string_raises():
    with pytest.raises(MalformedInput):
        sanitize_html(123)  # type: ignore[arg-type]


def test_escape_html():
    assert escape_html("<b>\"Tom\" & 'Jerry'</b>") == (
        "&lt;b&gt;&quot;Tom&quot; &amp; &#x27;Jerry&#x27;&lt;/b&gt;"
    )
    assert escape_html(None) == ""


def test_sanitize_input():
    assert sanitize_input("  <b>Dakar</b>  ") == "bDakar/b"
    assert sanitize_input("x" * 600) == "x" * 500
    assert sanitize_input("abcdef", max_length=3) == "abc"
    assert sanitize_input(None) == ""
