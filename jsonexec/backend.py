import os

WRITE_STRATEGY_ENV_VAR = "JSONEXEC_WRITE_STRATEGY"
DEFAULT_WRITE_STRATEGY = "put"
_VALID_WRITE_STRATEGIES = {"put", "direct"}


def resolve_write_strategy(preference: str | None = None) -> str:
    """
    Pick the strategy `DocumentContext.set` uses to write into a document.

    `put` resolves the parent container of the target path and assigns the
    leaf key on it. `direct` hands the whole path to the engine's
    update-or-create operation, which also builds missing parents.
    """
    requested = (
        (preference or os.getenv(WRITE_STRATEGY_ENV_VAR, DEFAULT_WRITE_STRATEGY))
        .strip()
        .lower()
    )

    if requested not in _VALID_WRITE_STRATEGIES:
        valid_options = ", ".join(sorted(_VALID_WRITE_STRATEGIES))
        raise ValueError(
            f"Invalid write strategy '{requested}'. Expected one of: {valid_options}."
        )
    return requested
