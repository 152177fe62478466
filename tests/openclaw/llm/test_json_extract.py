import pytest

from openclaw.llm._json import extract_candidate, try_parse


def test_fenced_block_interior_is_trimmed():
    raw = 'Sure! ```json\n  {"a": 1}  \n```'
    assert extract_candidate(raw) == '{"a": 1}'


def test_untagged_and_uppercase_fences():
    assert extract_candidate("```\n[1, 2]\n```") == "[1, 2]"
    assert extract_candidate('```JSON\n{"b":2}\n```') == '{"b":2}'


def test_fence_wins_over_outer_braces():
    raw = '{"outer": true} ```json\n{"inner": 1}\n``` trailing }'
    assert extract_candidate(raw) == '{"inner": 1}'


def test_first_open_to_last_close_brace():
    raw = 'Here you go: {"a": {"b": 2}} hope it helps'
    assert extract_candidate(raw) == '{"a": {"b": 2}}'


def test_brace_span_is_preferred_over_array_span():
    raw = '[1] and {"a": 1}'
    assert extract_candidate(raw) == '{"a": 1}'


def test_array_span_when_no_braces():
    assert extract_candidate("list: [1, 2, 3] done") == "[1, 2, 3]"


def test_closing_before_opening_is_not_a_span():
    assert extract_candidate("} nothing {") == "} nothing {"


def test_plain_text_is_returned_trimmed():
    assert extract_candidate("  no json here \n") == "no json here"
    assert extract_candidate(None) == ""


def test_unrelated_brace_pairs_select_wide_span():
    raw = 'a {"x": 1} b {"y": 2} c'
    candidate = extract_candidate(raw)
    assert candidate == '{"x": 1} b {"y": 2}'
    assert try_parse(candidate) is None


def test_try_parse_valid_values():
    assert try_parse('{"a": 1}') == {"a": 1}
    assert try_parse("[1, 2]") == [1, 2]


@pytest.mark.parametrize(
    "bad", ["", "{", "{'a': 1}", "no json", "null", None, 42, b"{}", "[1,]"]
)
def test_try_parse_never_raises(bad):
    assert try_parse(bad) is None
