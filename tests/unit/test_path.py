import pytest

from jsonexec import compile_path
from jsonexec.errors import InvalidPathError, WriteTargetError


def test_compile_path__keeps_raw_string():
    path = compile_path("$.store.book[0].title")

    assert path.raw == "$.store.book[0].title"
    assert str(path) == "$.store.book[0].title"


def test_compile_path__strips_surrounding_whitespace():
    path = compile_path("  $.store  ")

    assert path.raw == "$.store"


@pytest.mark.parametrize("raw", ["", "   ", "$.store.book[", "$.store.]"])
def test_compile_path__rejects_malformed_syntax(raw):
    with pytest.raises(InvalidPathError) as exc_info:
        compile_path(raw)

    assert exc_info.value.path == raw


def test_compile_path__returns_equal_expressions_for_same_raw_string():
    assert compile_path("$.store") == compile_path("$.store")


@pytest.mark.parametrize(
    "raw",
    ["$", "$.store", "$.store.book[0].title", "$['store']['bicycle']", "$[0].colour"],
)
def test_is_definite__true_for_single_node_paths(raw):
    assert compile_path(raw).is_definite


@pytest.mark.parametrize(
    "raw",
    [
        "$.store.book[*].title",
        "$.store.*",
        "$..title",
        "$..book[?(@.isbn)]",
        "$.store.book[0:2]",
    ],
)
def test_is_definite__false_for_multi_node_paths(raw):
    assert not compile_path(raw).is_definite


def test_split_leaf__splits_field_leaf():
    parent, key = compile_path("$.store.book[0].title").split_leaf()

    assert parent.raw == "$.store.book[0]"
    assert key == "title"


def test_split_leaf__splits_index_leaf():
    parent, key = compile_path("$.some_integers[2]").split_leaf()

    assert parent.raw == "$.some_integers"
    assert key == 2


def test_split_leaf__splits_quoted_leaf():
    parent, key = compile_path("$['store']['bicycle']").split_leaf()

    assert parent.raw == "$['store']"
    assert key == "bicycle"


@pytest.mark.parametrize(
    ("raw", "expected_key"),
    [("$.store.'owner'", "owner"), ("$.store.'a.b'", "a.b"), ('$.store."a.b"', "a.b")],
)
def test_split_leaf__unquotes_dotted_leaf(raw, expected_key):
    parent, key = compile_path(raw).split_leaf()

    assert parent.raw == "$.store"
    assert key == expected_key


def test_split_leaf__top_level_key_has_root_parent():
    parent, key = compile_path("$.expensive").split_leaf()

    assert parent.raw == "$"
    assert key == "expensive"


def test_split_leaf__ignores_dots_inside_filter_predicates():
    parent, key = compile_path("$.store.book[?(@.price > 10)].title").split_leaf()

    assert parent.raw == "$.store.book[?(@.price > 10)]"
    assert key == "title"


@pytest.mark.parametrize("raw", ["$", "$..title", "$.store.book[*]", "$.store.*"])
def test_split_leaf__raises_for_paths_without_writable_leaf(raw):
    with pytest.raises(WriteTargetError):
        compile_path(raw).split_leaf()
