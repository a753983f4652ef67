"""Tests for the query classifier."""

import pytest
from lql.classifier import classify, classify_query
from lql.context import ContextKind, ContextStack
from lql.registry import CategoryRegistry
from lql.scanner import scan
from lql.types import Category


def _categories(text: str, registry: CategoryRegistry | None = None) -> list[tuple[str, Category]]:
    return [(token.text, token.category) for token in classify_query(text, registry)]


def test_classify_top_level_filter() -> None:
    """Test that status=200 is a filter key, operator and value."""
    tokens = classify_query("status=200")
    assert [(t.text, t.category) for t in tokens] == [
        ("status", Category.FILTER_KEY),
        ("=", Category.OPERATOR),
        ("200", Category.VALUE),
    ]
    assert all(t.context == ContextKind.TOP_LEVEL for t in tokens)


def test_classify_keyword_argument() -> None:
    """Test that count(by=1) tags by as an argument key."""
    tokens = classify_query("count(by=1)")
    assert [(t.text, t.category) for t in tokens] == [
        ("count", Category.FUNCTION),
        ("(", Category.PLAIN),
        ("by", Category.ARG_KEY),
        ("=", Category.OPERATOR),
        ("1", Category.VALUE),
        (")", Category.PLAIN),
    ]
    by_token = tokens[2]
    assert by_token.context == ContextKind.FUNCTION_ARGS
    assert by_token.function_name == "count"
    assert tokens[4].context == ContextKind.FUNCTION_ARGS


def test_classify_longest_operator() -> None:
    """Test that >= is one operator token."""
    assert _categories("a >= b") == [
        ("a", Category.FILTER_KEY),
        (">=", Category.OPERATOR),
        ("b", Category.VALUE),
    ]


def test_function_requires_open_paren() -> None:
    """Test that a function name without ( is plain."""
    assert _categories("count") == [("count", Category.PLAIN)]
    assert _categories("count(")[0] == ("count", Category.FUNCTION)
    assert _categories("count  (")[0] == ("count", Category.FUNCTION)


def test_unknown_word_before_paren_is_not_function() -> None:
    """Test that only registered names are functions."""
    assert _categories("notAFunction(x)")[0] == ("notAFunction", Category.PLAIN)


def test_function_detection_with_empty_registry(
    empty_registry: CategoryRegistry,
) -> None:
    """Test that an empty registry classifies no word as a function."""
    categories = _categories("count(by=1)", empty_registry)
    assert ("count", Category.FUNCTION) not in categories
    # Without a function frame, by=1 reads as a filter inside grouping parens
    assert ("by", Category.FILTER_KEY) in categories


def test_classify_regex_literal() -> None:
    """Test that a regex literal is a single REGEX token."""
    tokens = classify_query("/ab*c/")
    assert len(tokens) == 1
    assert tokens[0].category == Category.REGEX
    assert tokens[0].span == (0, 6)


def test_classify_stray_slash_is_never_regex() -> None:
    """Test that a slash without a partner is not a regex."""
    categories = _categories("a / b")
    assert ("/", Category.PLAIN) in categories
    assert all(category != Category.REGEX for _, category in categories)


def test_classify_regex_filter() -> None:
    """Test a field compared against a regex literal."""
    assert _categories("url=/login/i") == [
        ("url", Category.FILTER_KEY),
        ("=", Category.OPERATOR),
        ("/login/i", Category.REGEX),
    ]


def test_classify_comments() -> None:
    """Test that comments are classified unconditionally."""
    assert _categories("// count(by=1)\n/* a=1 */ x") == [
        ("// count(by=1)", Category.COMMENT),
        ("/* a=1 */", Category.COMMENT),
        ("x", Category.PLAIN),
    ]


def test_classify_drops_whitespace() -> None:
    """Test that whitespace and newlines produce no tokens."""
    tokens = classify_query("  a\n\t=  1 \n")
    assert [t.text for t in tokens] == ["a", "=", "1"]
    assert [t.category for t in tokens] == [
        Category.FILTER_KEY,
        Category.OPERATOR,
        Category.VALUE,
    ]


def test_raw_fragment_index_points_at_scanner_output() -> None:
    """Test that raw_fragment_index refers to the full fragment list."""
    text = "a = 1"
    fragments = list(scan(text))
    tokens = classify(fragments)
    for token in tokens:
        assert fragments[token.raw_fragment_index].text == token.text
    assert [t.raw_fragment_index for t in tokens] == [0, 2, 4]


def test_classify_quoted_value() -> None:
    """Test a quoted string value."""
    assert _categories('method="GET"') == [
        ("method", Category.FILTER_KEY),
        ("=", Category.OPERATOR),
        ('"GET"', Category.VALUE),
    ]


def test_classify_pipeline() -> None:
    """Test a filter piped into a function call."""
    assert _categories("#repo=web | groupBy(field=host, function=count())") == [
        ("#repo", Category.FILTER_KEY),
        ("=", Category.OPERATOR),
        ("web", Category.VALUE),
        ("|", Category.OPERATOR),
        ("groupBy", Category.FUNCTION),
        ("(", Category.PLAIN),
        ("field", Category.ARG_KEY),
        ("=", Category.OPERATOR),
        ("host", Category.VALUE),
        (",", Category.PLAIN),
        ("function", Category.ARG_KEY),
        ("=", Category.OPERATOR),
        ("count", Category.FUNCTION),
        ("(", Category.PLAIN),
        (")", Category.PLAIN),
        (")", Category.PLAIN),
    ]


def test_connectives_do_not_make_keys_or_values() -> None:
    """Test that pipes and boolean keywords don't produce keys or values."""
    assert _categories("error | head") == [
        ("error", Category.PLAIN),
        ("|", Category.OPERATOR),
        ("head", Category.PLAIN),
    ]
    assert _categories("a=1 AND not b=2") == [
        ("a", Category.FILTER_KEY),
        ("=", Category.OPERATOR),
        ("1", Category.VALUE),
        ("AND", Category.OPERATOR),
        ("not", Category.OPERATOR),
        ("b", Category.FILTER_KEY),
        ("=", Category.OPERATOR),
        ("2", Category.VALUE),
    ]


def test_negated_filter() -> None:
    """Test a filter negated with !."""
    assert _categories("!status=500") == [
        ("!", Category.OPERATOR),
        ("status", Category.FILTER_KEY),
        ("=", Category.OPERATOR),
        ("500", Category.VALUE),
    ]


def test_assignment_at_top_level() -> None:
    """Test that := assignments read as key and value."""
    assert _categories("x := 5") == [
        ("x", Category.FILTER_KEY),
        (":=", Category.OPERATOR),
        ("5", Category.VALUE),
    ]


def test_non_equals_comparison_inside_function_is_not_arg_key() -> None:
    """Test that only = makes an argument key inside a function call."""
    tokens = classify_query("test(x > 5)")
    assert [(t.text, t.category) for t in tokens] == [
        ("test", Category.FUNCTION),
        ("(", Category.PLAIN),
        ("x", Category.PLAIN),
        (">", Category.OPERATOR),
        ("5", Category.VALUE),
        (")", Category.PLAIN),
    ]


def test_grouping_parens_keep_filter_context() -> None:
    """Test that plain parentheses don't change filter classification."""
    tokens = classify_query("(a=1 or b=2)")
    categories = [(t.text, t.category) for t in tokens]
    assert ("a", Category.FILTER_KEY) in categories
    assert ("b", Category.FILTER_KEY) in categories
    assert all(t.context == ContextKind.TOP_LEVEL for t in tokens)


def test_grouping_parens_inside_function_keep_function_context() -> None:
    """Test that a group's ) doesn't close the enclosing function call."""
    tokens = classify_query("groupBy((x), limit=10)")
    limit = next(t for t in tokens if t.text == "limit")
    assert limit.category == Category.ARG_KEY
    assert limit.function_name == "groupBy"


def test_nested_function_calls() -> None:
    """Test keyword arguments of nested calls belong to the inner call."""
    tokens = classify_query("groupBy(host, function=count(as=total))")
    as_token = next(t for t in tokens if t.text == "as")
    assert as_token.category == Category.ARG_KEY
    assert as_token.function_name == "count"
    assert tokens[-1].context == ContextKind.FUNCTION_ARGS
    assert tokens[-1].function_name == "groupBy"


def test_match_body_is_plain() -> None:
    """Test that keys and values inside a match body stay plain."""
    tokens = classify_query('status match { 200 => ok := "yes" ; * => drop() }')
    by_text = {t.text: t for t in tokens}
    assert by_text["status"].category == Category.PLAIN
    assert by_text["match"].category == Category.PLAIN
    assert by_text["ok"].category == Category.PLAIN
    assert by_text["ok"].context == ContextKind.MATCH_BODY
    assert by_text['"yes"'].category == Category.PLAIN
    assert by_text["=>"].category == Category.OPERATOR
    assert by_text[":="].category == Category.OPERATOR
    assert by_text["drop"].category == Category.FUNCTION


def test_case_body_then_top_level_again() -> None:
    """Test that the context returns to top level after a case body."""
    tokens = classify_query("case { a=1 | b:=2 ; * } | status=200")
    a_token = next(t for t in tokens if t.text == "a")
    assert a_token.category == Category.PLAIN
    assert a_token.context == ContextKind.MATCH_BODY
    status = next(t for t in tokens if t.text == "status")
    assert status.category == Category.FILTER_KEY
    assert status.context == ContextKind.TOP_LEVEL


def test_subquery_braces_are_top_level() -> None:
    """Test that a sub-query inside braces reads as top-level filters."""
    tokens = classify_query("join({#type=dns}, field=host)")
    type_token = next(t for t in tokens if t.text == "#type")
    assert type_token.category == Category.FILTER_KEY
    assert type_token.context == ContextKind.TOP_LEVEL
    field = next(t for t in tokens if t.text == "field")
    assert field.category == Category.ARG_KEY
    assert field.function_name == "join"


def test_unmatched_close_paren_leaves_sentinel() -> None:
    """Test that a stray ) neither raises nor corrupts the stack."""
    stack = ContextStack()
    tokens = classify_query("a)", stack=stack)
    assert [t.text for t in tokens] == ["a", ")"]
    assert stack.depth == 0
    assert stack.current().kind == ContextKind.TOP_LEVEL


def test_stack_after_unclosed_function_call() -> None:
    """Test the stack left behind by an incomplete call."""
    stack = ContextStack()
    classify_query("count(by=", stack=stack)
    assert stack.depth == 1
    assert stack.current().kind == ContextKind.FUNCTION_ARGS
    assert stack.current().function_name == "count"


@pytest.mark.parametrize(
    "text",
    [
        "",
        ")",
        ")))}}}",
        "(((",
        '"unterminated',
        "/* unterminated",
        "/unterminated regex",
        "count(by=",
        "match {",
        "= = =",
        ":= >= <= =>",
        "a=/b/ | c(d={e=f)}",
        "\n\n\t",
    ],
)
def test_classify_never_raises(text: str) -> None:
    """Test that classification is total over malformed input."""
    tokens = classify_query(text)
    for token in tokens:
        assert text[token.start : token.end] == token.text


def test_classify_is_idempotent() -> None:
    """Test that classifying the same input twice gives identical output."""
    text = 'status=200 | groupBy(field=host, function=count()) // x\n/a+/'
    assert classify_query(text) == classify_query(text)


def test_classify_accepts_generator() -> None:
    """Test that classify consumes the scanner generator directly."""
    tokens = classify(scan("a=1"), CategoryRegistry.default())
    assert [t.category for t in tokens] == [
        Category.FILTER_KEY,
        Category.OPERATOR,
        Category.VALUE,
    ]
