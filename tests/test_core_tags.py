import textwrap
from typing import Any, Dict, Optional

import pytest
from pystl.compiler.compiler import Compiler
from pystl.compiler.exceptions import ElementError, MissingRequiredAttribute

CORE = 'xmlns:c="urn:pystl:core"'


def render(body: str, context: Optional[Dict[str, Any]] = None, **options: Any) -> str:
    source = f"<div {CORE}>{body}</div>"
    return Compiler(**options).compile(source).render(context or {})


def test_if() -> None:
    body = '<c:if test="$show">yes</c:if>'
    assert render(body, {"show": True}) == "<div>yes</div>"
    assert render(body, {"show": False}) == "<div></div>"
    assert render(body) == "<div></div>"


def test_empty_if_body() -> None:
    assert render('<c:if test="$show"/>', {"show": True}) == "<div></div>"


def test_if_requires_test() -> None:
    with pytest.raises(MissingRequiredAttribute):
        render("<c:if>x</c:if>")


def test_choose() -> None:
    body = textwrap.dedent(
        """\
        <c:choose>
          <c:when test="$n == 1">one</c:when>
          <c:when test="$n == 2">two</c:when>
          <c:otherwise>many</c:otherwise>
        </c:choose>"""
    )
    assert render(body, {"n": 1}) == "<div>one</div>"
    assert render(body, {"n": 2}) == "<div>two</div>"
    assert render(body, {"n": 5}) == "<div>many</div>"


def test_when_outside_choose() -> None:
    with pytest.raises(ElementError, match="must be inside"):
        render('<c:when test="$x">a</c:when>')


def test_otherwise_needs_a_when() -> None:
    with pytest.raises(ElementError, match="must follow"):
        render("<c:choose><c:otherwise>a</c:otherwise></c:choose>")


def test_choose_rejects_text() -> None:
    with pytest.raises(ElementError, match="text is not allowed"):
        render('<c:choose>oops<c:when test="$x">a</c:when></c:choose>')


def test_for_each() -> None:
    body = '<c:for-each var="item" in="$items"><i><c:out value="$item"/></i></c:for-each>'
    assert render(body, {"items": ["a", "b"]}) == "<div><i>a</i><i>b</i></div>"
    assert render(body, {"items": None}) == "<div></div>"


def test_for_each_index() -> None:
    body = (
        '<c:for-each var="item" index="i" in="$items">'
        '<c:out value="$i"/>=<c:out value="$item"/>;'
        "</c:for-each>"
    )
    assert render(body, {"items": ["x", "y"]}) == "<div>0=x;1=y;</div>"


def test_out_escapes_by_default() -> None:
    assert render('<c:out value="$v"/>', {"v": "<b>"}) == "<div>&lt;b&gt;</div>"
    assert render('<c:out value="$v" escape="no"/>', {"v": "<b>"}) == "<div><b></div>"


def test_out_literal_and_default() -> None:
    assert render('<c:out value="plain"/>') == "<div>plain</div>"
    assert render('<c:out value="$missing" default="anon"/>') == "<div>anon</div>"


def test_out_rejects_bad_boolean() -> None:
    from pystl.compiler.exceptions import InvalidBooleanLiteral

    with pytest.raises(InvalidBooleanLiteral):
        render('<c:out value="$v" escape="sometimes"/>')


def test_set() -> None:
    body = '<c:set var="greeting" value="hello"/><c:out value="$greeting"/>'
    assert render(body) == "<div>hello</div>"


def test_set_does_not_leak_into_caller_context() -> None:
    context = {"a": 1}
    render('<c:set var="b" value="2"/>', context)
    assert context == {"a": 1}


def test_comment_drops_body() -> None:
    assert render("a<c:comment>secret <b>x</b></c:comment>b") == "<div>ab</div>"


def test_reference_marker_reads_globals() -> None:
    compiled = Compiler().compile(f'<p {CORE}><c:out value="@site"/></p>')
    assert compiled.render({}, globals={"site": "Example"}) == "<p>Example</p>"


HTML = 'xmlns:h="urn:pystl:html"'


def render_html(body: str, context: Optional[Dict[str, Any]] = None) -> str:
    return Compiler().compile(f"<div {HTML}>{body}</div>").render(context or {})


def test_link() -> None:
    body = '<h:link href="$url" target="_blank">Home</h:link>'
    assert render_html(body, {"url": "/x?a=1&b=2"}) == (
        '<div><a href="/x?a=1&amp;b=2" target="_blank" rel="noopener">Home</a></div>'
    )


def test_link_requires_href() -> None:
    with pytest.raises(MissingRequiredAttribute):
        render_html("<h:link>x</h:link>")


def test_image_defaults_alt() -> None:
    assert render_html('<h:image src="logo.png"/>') == '<div><img src="logo.png" alt="" /></div>'


def test_meta() -> None:
    assert render_html('<h:meta charset="utf-8"/>') == '<div><meta charset="utf-8" /></div>'


def test_when_after_otherwise_is_rejected() -> None:
    body = (
        '<c:choose><c:when test="$a">a</c:when><c:otherwise>z</c:otherwise>'
        '<c:when test="$b">b</c:when></c:choose>'
    )
    with pytest.raises(ElementError, match="cannot follow"):
        render(body)


def test_second_otherwise_is_rejected() -> None:
    body = (
        '<c:choose><c:when test="$a">a</c:when><c:otherwise>y</c:otherwise>'
        "<c:otherwise>z</c:otherwise></c:choose>"
    )
    with pytest.raises(ElementError, match="cannot follow"):
        render(body)


def test_for_each_empty_index_still_enumerates() -> None:
    source = (
        f'<div {CORE}><c:for-each var="item" index="" in="$items">'
        '<c:out value="$item"/></c:for-each></div>'
    )
    compiled = Compiler().compile(source)
    assert "enumerate(" in compiled.source
    assert compiled.render({"items": ["a", "b"]}) == "<div>ab</div>"
