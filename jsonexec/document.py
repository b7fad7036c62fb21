import json
import logging
from collections.abc import Callable
from typing import Any

from jsonpath_ng.jsonpath import Root, This

from .backend import resolve_write_strategy
from .errors import MalformedDocumentError, PathNotFoundError, WriteTargetError
from .path import PathExpression

logger = logging.getLogger(__name__)


def render_value(value: Any, *, unwrap: bool = False) -> str:
    """
    Render an evaluated value for a string sink.

    Strings pass through untouched, everything else is written as compact
    JSON. With `unwrap`, a list holding exactly one element is replaced by
    that element first.

    Examples:
        >>> render_value(["x"], unwrap=True)
        'x'
        >>> render_value([1, 2, 3, 4], unwrap=True)
        '[1,2,3,4]'
        >>> render_value(8.95)
        '8.95'
    """
    if unwrap and isinstance(value, list) and len(value) == 1:
        value = value[0]
    if isinstance(value, str):
        return value
    return json.dumps(
        value, separators=(",", ":"), ensure_ascii=False, allow_nan=False
    )


def _reject_constant(name: str):
    raise ValueError(f"{name} is not a valid JSON value")


def _put_into(container: Any, key: str | int, value: Any, path: str):
    if isinstance(container, dict):
        if not isinstance(key, str):
            raise WriteTargetError(
                path, f"Expected an array to write index {key}, got an object"
            )
        container[key] = value
        return

    if isinstance(container, list):
        if not isinstance(key, int):
            raise WriteTargetError(
                path, f"Expected an object to write key '{key}', got an array"
            )
        idx = key + len(container) if key < 0 else key
        if 0 <= idx < len(container):
            container[idx] = value
        elif idx == len(container):
            container.append(value)
        else:
            raise WriteTargetError(
                path, f"Index {key} is out of range for array of {len(container)}"
            )
        return

    raise WriteTargetError(
        path, f"Expected an object or array to write into, got {type(container).__name__}"
    )


def _put_write(context: "DocumentContext", path: PathExpression, value: Any):
    parent, key = path.split_leaf()
    logger.debug("Writing key %r under parent path %s", key, parent)
    context.put(parent, key, value, target_path=path.raw)


def _direct_write(context: "DocumentContext", path: PathExpression, value: Any):
    if isinstance(path.expression, Root | This):
        raise WriteTargetError(path.raw, "Path has no parent container to write into")
    try:
        path.expression.update_or_create(context.document, value)
    except (NotImplementedError, AttributeError, IndexError, KeyError, TypeError) as ex:
        raise WriteTargetError(path.raw, f"Cannot write value: {ex}") from ex
    if path.is_definite and not path.find(context.document):
        raise WriteTargetError(path.raw, "Path passes through a scalar value")


_WRITE_STRATEGIES: dict[str, Callable[["DocumentContext", PathExpression, Any], None]] = {
    "put": _put_write,
    "direct": _direct_write,
}


class DocumentContext:
    """
    One parsed JSON document, read and written through compiled paths.

    A context belongs to a single invocation; it is created by `parse`,
    mutated by `set`/`put` and rendered once by `serialize`.
    """

    def __init__(self, document: dict | list, *, write_strategy: str | None = None):
        self._document = document
        self.write_strategy = resolve_write_strategy(write_strategy)

    @classmethod
    def parse(
        cls, text: str | None, *, write_strategy: str | None = None
    ) -> "DocumentContext":
        """
        Parse `text` into a new context.

        Raises:
            MalformedDocumentError: If `text` is empty, not JSON, or its root
                is neither an object nor an array.
        """
        if text is None or not text.strip():
            raise MalformedDocumentError("Document is empty.")
        try:
            document = json.loads(text, parse_constant=_reject_constant)
        except ValueError as ex:
            raise MalformedDocumentError(f"Document is not valid JSON: {ex}") from ex
        except RecursionError as ex:
            raise MalformedDocumentError("Document is nested too deeply.") from ex
        if not isinstance(document, dict | list):
            raise MalformedDocumentError(
                f"Document root must be an object or array, got {type(document).__name__}."
            )
        return cls(document, write_strategy=write_strategy)

    @property
    def document(self) -> dict | list:
        return self._document

    def evaluate(self, path: PathExpression) -> Any:
        """
        Read the value(s) named by `path`.

        Definite paths return the matched node itself; paths with wildcards,
        filters, slices or recursive descent return a list of every match,
        which may be empty.

        Raises:
            PathNotFoundError: If a definite path matches nothing.
        """
        values = path.find(self._document)
        if path.is_definite:
            if not values:
                raise PathNotFoundError(path.raw)
            return values[0]
        return values

    def read_string(self, path: PathExpression, *, unwrap: bool = False) -> str:
        return render_value(self.evaluate(path), unwrap=unwrap)

    def put(
        self,
        parent: PathExpression,
        key: str | int,
        value: Any,
        *,
        target_path: str | None = None,
    ):
        """
        Assign `key` on every container named by `parent`.

        String keys are set on objects; integer keys overwrite an array
        element, or append when the index equals the array length.

        Raises:
            PathNotFoundError: If `parent` is definite and matches nothing.
            WriteTargetError: If a matched container cannot hold `key`.
        """
        target = target_path or f"{parent.raw}[{key!r}]"
        if parent.is_definite:
            containers = [self.evaluate(parent)]
        else:
            containers = parent.find(self._document)
        for container in containers:
            _put_into(container, key, value, target)

    def set(self, path: PathExpression, value: Any):
        _WRITE_STRATEGIES[self.write_strategy](self, path, value)

    def serialize(self) -> str:
        return json.dumps(
            self._document, separators=(",", ":"), ensure_ascii=False, allow_nan=False
        )
