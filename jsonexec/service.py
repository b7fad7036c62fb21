import logging
from collections.abc import Iterable

from .backend import resolve_write_strategy
from .document import DocumentContext
from .errors import JsonExecError, ServiceError
from .execution import Execution, TargetKind
from .message import Host

logger = logging.getLogger(__name__)


class PathService:
    """
    Runs an ordered list of executions against one document per invocation.

    Executions run strictly in configured order against a single
    `DocumentContext`, so later executions observe earlier writes. A failure
    aborts the remaining executions; effects already applied to the document
    or to host attributes are kept.
    """

    allowed_targets: frozenset[TargetKind] = frozenset()

    def __init__(
        self,
        executions: Iterable[Execution],
        *,
        source: str | None = None,
        suppress_not_found: bool = False,
        unwrap_single_result: bool = False,
        write_strategy: str | None = None,
    ):
        self.executions = tuple(executions)
        self.source = source
        self.suppress_not_found = suppress_not_found
        self.unwrap_single_result = unwrap_single_result
        self.write_strategy = (
            resolve_write_strategy(write_strategy) if write_strategy else None
        )
        for index, execution in enumerate(self.executions):
            if execution.target.kind not in self.allowed_targets:
                raise ValueError(
                    f"{type(self).__name__} does not support "
                    f"'{execution.target.kind.value}' targets (execution={index})."
                )

    def service(self, host: Host):
        """
        Process one message.

        Raises:
            ServiceError: Wrapping the error that stopped the invocation; the
                original error is available as `__cause__`.
        """
        logger.debug("Started %s", type(self).__name__)
        try:
            context = self._parse(host)
            self._apply_all(context, host)
            self._finish(context, host)
        finally:
            logger.debug("Finished %s", type(self).__name__)

    def _parse(self, host: Host) -> DocumentContext:
        try:
            if self.source is None:
                text = host.read_document()
            else:
                text = host.resolve_external(self.source)
            return DocumentContext.parse(text, write_strategy=self.write_strategy)
        except JsonExecError as ex:
            logger.error("Could not read JSON document: %s", ex)
            raise ServiceError("Could not read JSON document") from ex

    def _apply_all(self, context: DocumentContext, host: Host):
        for index, execution in enumerate(self.executions):
            try:
                execution.apply(
                    context,
                    host,
                    unwrap=self.unwrap_single_result,
                    suppress_not_found=self.suppress_not_found,
                )
            except JsonExecError as ex:
                path = getattr(ex, "path", None)
                logger.error("Execution %d failed: %s", index, ex)
                raise ServiceError(
                    f"Execution failed: {ex}", index=index, path=path
                ) from ex

    def _finish(self, context: DocumentContext, host: Host):
        pass


class PathReadService(PathService):
    """
    Extracts values from the document into host attributes or the payload.

    For each execution the source path is evaluated and the rendered value
    handed to the target. When several executions target the payload the
    last one wins.

    Example:
        >>> from jsonexec import Execution, Message, Source, Target
        >>> message = Message(payload='{"store": {"book": [{"title": "A"}]}}')
        >>> PathReadService(
        ...     [Execution(Source.literal("$.store.book[0].title"), Target.attribute("title"))]
        ... ).service(message)
        >>> message.metadata["title"]
        'A'
    """

    allowed_targets = frozenset({TargetKind.ATTRIBUTE, TargetKind.PAYLOAD})


class PathInsertService(PathService):
    """
    Writes values into the document and hands the serialized result back.

    `target` is None to replace the host payload, or an attribute key to
    receive the updated document instead.
    """

    allowed_targets = frozenset({TargetKind.DOCUMENT})

    def __init__(
        self,
        executions: Iterable[Execution],
        *,
        source: str | None = None,
        target: str | None = None,
        suppress_not_found: bool = False,
        unwrap_single_result: bool = False,
        write_strategy: str | None = None,
    ):
        super().__init__(
            executions,
            source=source,
            suppress_not_found=suppress_not_found,
            unwrap_single_result=unwrap_single_result,
            write_strategy=write_strategy,
        )
        self.target = target

    def _finish(self, context: DocumentContext, host: Host):
        content = context.serialize()
        logger.debug("Updated JSON document, %d characters", len(content))
        if self.target is None:
            host.write_document(content)
        else:
            host.write_external(self.target, content)
