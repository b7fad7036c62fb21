from .backend import resolve_write_strategy
from .config import load_service, service_from_config
from .document import DocumentContext, render_value
from .execution import Execution, Source, SourceKind, Target, TargetKind
from .message import Host, Message
from .path import PathExpression, compile_path
from .service import PathInsertService, PathReadService

__all__ = [
    "DocumentContext",
    "Execution",
    "Host",
    "Message",
    "PathExpression",
    "PathInsertService",
    "PathReadService",
    "Source",
    "SourceKind",
    "Target",
    "TargetKind",
    "compile_path",
    "load_service",
    "render_value",
    "resolve_write_strategy",
    "service_from_config",
]
