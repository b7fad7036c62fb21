import json
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from .errors import ConfigurationError
from .execution import Execution, Source, SourceKind, Target, TargetKind
from .service import PathInsertService, PathReadService

_MODES = {"read", "insert"}


def _enum_value(enum_cls, raw: Any, field_name: str, index: int):
    try:
        return enum_cls(str(raw).strip().lower())
    except ValueError as ex:
        valid_options = ", ".join(member.value for member in enum_cls)
        raise ConfigurationError(
            f"Invalid {field_name} '{raw}' in execution {index}. Expected one of: {valid_options}."
        ) from ex


def _optional_bool(raw: Any, field_name: str) -> bool | None:
    if raw is None or isinstance(raw, bool):
        return raw
    raise ConfigurationError(f"'{field_name}' must be true, false or null, got {raw!r}.")


def execution_from_config(entry: Mapping[str, Any], index: int = 0) -> Execution:
    """
    Build an `Execution` from one configuration entry.

    Keys: `source_kind`, `source_value`, `target_kind`, `target_value` and
    optionally `target_path_kind` (how a document target finds its path,
    `literal` or `attribute`) and `suppress_not_found`.
    """
    if not isinstance(entry, Mapping):
        raise ConfigurationError(f"Execution {index} must be a mapping.")

    source_kind = _enum_value(
        SourceKind, entry.get("source_kind", "literal"), "source_kind", index
    )
    if "source_value" not in entry:
        raise ConfigurationError(f"Execution {index} is missing 'source_value'.")
    source = Source(source_kind, str(entry["source_value"]))

    target_kind = _enum_value(TargetKind, entry.get("target_kind"), "target_kind", index)
    target_value = entry.get("target_value")
    if target_kind is TargetKind.PAYLOAD:
        target = Target.payload()
    elif not target_value:
        raise ConfigurationError(f"Execution {index} is missing 'target_value'.")
    elif target_kind is TargetKind.ATTRIBUTE:
        target = Target.attribute(str(target_value))
    else:
        path_kind = _enum_value(
            SourceKind, entry.get("target_path_kind", "literal"), "target_path_kind", index
        )
        target = Target.document(Source(path_kind, str(target_value)))

    return Execution(
        source,
        target,
        suppress_not_found=_optional_bool(
            entry.get("suppress_not_found"), "suppress_not_found"
        ),
    )


def service_from_config(config: Mapping[str, Any]) -> PathReadService | PathInsertService:
    """
    Build a read or insert service from a configuration mapping.

    Raises:
        ConfigurationError: If the mapping is structurally invalid.
        InvalidPathError: If a static path does not compile.
    """
    if not isinstance(config, Mapping):
        raise ConfigurationError("Service configuration must be a mapping.")

    mode = str(config.get("mode", "read")).strip().lower()
    if mode not in _MODES:
        valid_options = ", ".join(sorted(_MODES))
        raise ConfigurationError(f"Invalid mode '{mode}'. Expected one of: {valid_options}.")

    entries = config.get("executions") or []
    if not isinstance(entries, list):
        raise ConfigurationError("'executions' must be a list.")
    executions = [execution_from_config(entry, i) for i, entry in enumerate(entries)]

    options = {
        "source": config.get("source"),
        "suppress_not_found": bool(
            _optional_bool(config.get("suppress_not_found"), "suppress_not_found")
        ),
        "unwrap_single_result": bool(
            _optional_bool(config.get("unwrap_single_result"), "unwrap_single_result")
        ),
        "write_strategy": config.get("write_strategy"),
    }
    try:
        if mode == "insert":
            return PathInsertService(executions, target=config.get("target"), **options)
        return PathReadService(executions, **options)
    except ValueError as ex:
        raise ConfigurationError(str(ex)) from ex


def load_service(path: str | Path) -> PathReadService | PathInsertService:
    """Load a service definition from a YAML or JSON file."""
    path = Path(path)
    with open(path, encoding="utf-8") as f:
        if path.suffix.lower() == ".json":
            config = json.load(f)
        else:
            config = yaml.safe_load(f)
    return service_from_config(config)
