import logging
from dataclasses import dataclass, field
from enum import Enum

from .document import DocumentContext
from .errors import PathNotFoundError
from .message import Host
from .path import PathExpression, compile_path

logger = logging.getLogger(__name__)


class SourceKind(str, Enum):
    LITERAL = "literal"
    ATTRIBUTE = "attribute"
    PATH = "path"


class TargetKind(str, Enum):
    ATTRIBUTE = "attribute"
    DOCUMENT = "document"
    PAYLOAD = "payload"


@dataclass(frozen=True)
class Source:
    """
    Where a string comes from.

    When the string is a value: `LITERAL` is used as-is, `ATTRIBUTE` is
    looked up on the host and `PATH` is evaluated against the document.
    When the string names a path: `LITERAL` and `PATH` are static paths,
    `ATTRIBUTE` holds the path in a host attribute.
    """

    kind: SourceKind
    value: str

    def __post_init__(self):
        object.__setattr__(self, "kind", SourceKind(self.kind))
        if self.kind is SourceKind.PATH:
            compile_path(self.value)

    @classmethod
    def literal(cls, value: str) -> "Source":
        return cls(SourceKind.LITERAL, value)

    @classmethod
    def attribute(cls, key: str) -> "Source":
        return cls(SourceKind.ATTRIBUTE, key)

    @classmethod
    def path(cls, raw: str) -> "Source":
        return cls(SourceKind.PATH, raw)


@dataclass(frozen=True)
class Target:
    kind: TargetKind
    key: str | None = None
    location: Source | None = None

    def __post_init__(self):
        object.__setattr__(self, "kind", TargetKind(self.kind))
        if self.kind is TargetKind.ATTRIBUTE and not self.key:
            raise ValueError("Attribute targets require a key.")
        if self.kind is TargetKind.DOCUMENT and self.location is None:
            raise ValueError("Document targets require a path location.")

    @classmethod
    def attribute(cls, key: str) -> "Target":
        return cls(TargetKind.ATTRIBUTE, key=key)

    @classmethod
    def payload(cls) -> "Target":
        return cls(TargetKind.PAYLOAD)

    @classmethod
    def document(cls, location: str | Source) -> "Target":
        if isinstance(location, str):
            location = Source.literal(location)
        return cls(TargetKind.DOCUMENT, location=location)


@dataclass(frozen=True)
class Execution:
    """
    One (source, target) binding, applied once per invocation.

    With an `ATTRIBUTE` or `PAYLOAD` target the source names a path whose
    value is read out of the document. With a `DOCUMENT` target the source
    supplies a value that is written into the document at the target's path.

    `suppress_not_found` overrides the service-wide setting when not None.
    """

    source: Source
    target: Target
    suppress_not_found: bool | None = None
    _paths: dict[str, PathExpression] = field(
        init=False, default_factory=dict, repr=False, compare=False
    )

    def __post_init__(self):
        paths: dict[str, PathExpression] = {}
        writes_document = self.target.kind is TargetKind.DOCUMENT
        if self.source.kind is SourceKind.PATH or (
            self.source.kind is SourceKind.LITERAL and not writes_document
        ):
            paths["source"] = compile_path(self.source.value)
        if writes_document and self.target.location.kind is not SourceKind.ATTRIBUTE:
            paths["target"] = compile_path(self.target.location.value)
        object.__setattr__(self, "_paths", paths)

    @property
    def writes_document(self) -> bool:
        return self.target.kind is TargetKind.DOCUMENT

    def apply(
        self,
        context: DocumentContext,
        host: Host,
        *,
        unwrap: bool = False,
        suppress_not_found: bool = False,
    ):
        """
        Apply this execution to `context`.

        Raises:
            PathNotFoundError: If a definite path matches nothing and
                not-found suppression is off.
            WriteTargetError: If the write target cannot hold the value.
            AttributeNotFoundError: If a host attribute is missing.
            InvalidPathError: If a path read from an attribute is invalid.
        """
        if self.suppress_not_found is not None:
            suppress_not_found = self.suppress_not_found

        try:
            if self.writes_document:
                value = self._resolve_value(context, host, unwrap)
                path = self._locate(self.target.location, "target", host)
                logger.debug("Setting %s", path)
                context.set(path, value)
                return

            path = self._locate(self.source, "source", host)
            value = context.read_string(path, unwrap=unwrap)
            logger.debug("Read %s", path)
            if self.target.kind is TargetKind.ATTRIBUTE:
                host.write_external(self.target.key, value)
            else:
                host.write_document(value)
        except PathNotFoundError as ex:
            if not suppress_not_found:
                raise
            logger.debug("Path not found, skipping: %s", ex.path)

    def _resolve_value(self, context: DocumentContext, host: Host, unwrap: bool) -> str:
        if self.source.kind is SourceKind.LITERAL:
            return self.source.value
        if self.source.kind is SourceKind.ATTRIBUTE:
            return host.resolve_external(self.source.value)
        return context.read_string(self._paths["source"], unwrap=unwrap)

    def _locate(self, source: Source, role: str, host: Host) -> PathExpression:
        if source.kind is SourceKind.ATTRIBUTE:
            return compile_path(host.resolve_external(source.value))
        return self._paths[role]
