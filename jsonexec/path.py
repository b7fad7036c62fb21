import re
from dataclasses import dataclass, field
from typing import Any

from jsonpath_ng.ext import parse as jsonpath_parse
from jsonpath_ng.jsonpath import JSONPath, Child, Fields, Index, Root, This

from .errors import InvalidPathError, JsonExecError, WriteTargetError

_INDEX_LEAF = re.compile(r"^-?\d+$")
_QUOTED_LEAF = re.compile(r"""^(['"])(.*)\1$""")


def _is_definite(node: JSONPath) -> bool:
    if isinstance(node, Root | This):
        return True
    if isinstance(node, Child):
        return _is_definite(node.left) and _is_definite(node.right)
    if isinstance(node, Fields):
        return len(node.fields) == 1 and node.fields[0] != "*"
    if isinstance(node, Index):
        return len(getattr(node, "indices", (None,))) == 1
    return False


@dataclass(frozen=True)
class PathExpression:
    """
    A compiled JSON path.

    Instances are immutable and hold no document state, so a path compiled
    from static configuration can be shared by any number of invocations.
    """

    raw: str
    expression: JSONPath = field(repr=False, compare=False)

    def __str__(self) -> str:
        return self.raw

    @property
    def is_definite(self) -> bool:
        """True when the path can only ever name a single node."""
        return _is_definite(self.expression)

    def find(self, data: Any) -> list[Any]:
        return [match.value for match in self.expression.find(data)]

    def split_leaf(self) -> tuple["PathExpression", str | int]:
        """
        Split the path into the path of its parent container and the leaf key.

        The leaf is whatever follows the final separator of the raw path:
        either the last `.name` segment or a trailing `[n]` / `['name']`
        group. Separators inside brackets (filter predicates, quoted keys)
        are ignored.

        Examples:
            >>> compile_path("$.store.book[0].title").split_leaf()
            (PathExpression(raw='$.store.book[0]'), 'title')
            >>> compile_path("$.some_integers[2]").split_leaf()
            (PathExpression(raw='$.some_integers'), 2)
        """
        raw = self.raw.strip()
        separator_at: int | None = None
        bracket_depth = 0
        quote: str | None = None

        for i, ch in enumerate(raw):
            if quote is not None:
                if ch == quote:
                    quote = None
                continue
            if ch in {"'", '"'}:
                quote = ch
                continue
            if ch == "[":
                if bracket_depth == 0:
                    separator_at = i
                bracket_depth += 1
                continue
            if ch == "]":
                bracket_depth = max(0, bracket_depth - 1)
                continue
            if ch == "." and bracket_depth == 0:
                separator_at = i

        if separator_at is None:
            raise WriteTargetError(raw, "Path has no parent container to write into")

        parent_raw = raw[:separator_at]
        if raw[separator_at] == ".":
            leaf: str | int = raw[separator_at + 1 :]
            if not leaf or leaf == "*" or parent_raw.endswith("."):
                raise WriteTargetError(raw, f"Cannot write to leaf '{leaf}'")
            quoted = _QUOTED_LEAF.match(leaf)
            if quoted:
                leaf = quoted.group(2)
        else:
            inner = raw[separator_at + 1 : -1].strip()
            quoted = _QUOTED_LEAF.match(inner)
            if _INDEX_LEAF.match(inner):
                leaf = int(inner)
            elif quoted:
                leaf = quoted.group(2)
            else:
                raise WriteTargetError(raw, f"Cannot write to leaf '[{inner}]'")
            if parent_raw.endswith("."):
                raise WriteTargetError(raw, f"Cannot write to leaf '[{inner}]'")

        return compile_path(parent_raw), leaf


def compile_path(raw: str) -> PathExpression:
    """
    Compile a JSON path string.

    The extended `jsonpath-ng` grammar is used, so filter predicates such as
    `$..book[?(@.isbn)]` and `$..book[?(@.price < 10)]` are supported.

    Raises:
        InvalidPathError: If `raw` is empty or not a valid JSON path.
    """
    if not isinstance(raw, str) or not raw.strip():
        raise InvalidPathError(raw, "Path cannot be empty")

    try:
        expression = jsonpath_parse(raw.strip())
    except JsonExecError:
        raise
    except Exception as ex:
        raise InvalidPathError(raw, f"Failed to parse path: {ex}") from ex

    return PathExpression(raw=raw.strip(), expression=expression)
