import pytest

from openclaw import helpers as hp
from openclaw.landing import render_landing_html, render_redirect_html
from openclaw.utm import build_utm_url


def test_truncate_message_short_text_unchanged():
    assert hp.truncate_message("hi", limit=10) == "hi"
    assert hp.truncate_message("x" * 10, limit=10) == "x" * 10
    assert hp.truncate_message(None) == ""


@pytest.mark.parametrize("length", [3801, 5000, 100000])
def test_truncate_message_is_exactly_limit(length):
    out = hp.truncate_message("a" * length)
    assert len(out) == 3800
    assert out.endswith("[message truncated]")


def test_truncate_message_marker_longer_than_limit():
    assert hp.truncate_message("abcdef", limit=3, marker="[cut]") == "[cu"


def test_slugify():
    assert hp.slugify("  Hello, World! -- 2024 ") == "hello-world-2024"
    assert hp.slugify(None) == ""
    assert len(hp.slugify("a" * 100)) == 60


def test_field_defaults():
    assert hp.field({"a": ""}, "a", "d") == "d"
    assert hp.field({"a": None}, "a") == ""
    assert hp.field({"a": 0}, "a") == 0
    assert hp.field("not a mapping", "a") == ""


def test_as_mapping_and_list():
    assert hp.as_mapping([1]) == {}
    assert hp.as_list({"a": 1}) == []
    assert hp.as_list([1]) == [1]


def test_now_iso_is_utc():
    assert hp.now_iso().endswith("+00:00")


def test_render_landing_escapes_and_caps_bullets():
    page = render_landing_html(
        title="A & B",
        headline="h",
        subheadline="s",
        bullets=[f"<i>{i}</i>" for i in range(10)],
        cta_text="Go",
        cta_url='https://x.example/?a=1&b="2"',
        disclaimer="d",
    )
    assert "<title>A &amp; B</title>" in page
    assert page.count("<li>") == 6
    assert "&lt;i&gt;0&lt;/i&gt;" in page
    assert 'href="https://x.example/?a=1&amp;b=&quot;2&quot;"' in page


def test_render_redirect_html():
    out = render_redirect_html("https://x.example/?a=1&b=2")
    assert 'content="0; url=https://x.example/?a=1&amp;b=2"' in out


def test_build_utm_url_encodes_values():
    url = build_utm_url(
        "https://lp.example",
        {"utm_source": "x", "utm_medium": "a/b", "utm_campaign": "c&d", "utm_content": "(v1)"},
    )
    assert url == (
        "https://lp.example?utm_source=x&utm_medium=a%2Fb"
        "&utm_campaign=c%26d&utm_content=(v1)"
    )
