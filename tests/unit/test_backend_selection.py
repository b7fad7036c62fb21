import pytest

from jsonexec import DocumentContext
from jsonexec import backend as backend_module


def test_resolve_write_strategy_returns_requested_strategy():
    assert backend_module.resolve_write_strategy("direct") == "direct"


def test_resolve_write_strategy_normalises_case_and_whitespace():
    assert backend_module.resolve_write_strategy("  PUT ") == "put"


def test_resolve_write_strategy_rejects_invalid_name():
    with pytest.raises(ValueError):
        backend_module.resolve_write_strategy("not-a-strategy")


def test_resolve_write_strategy_defaults_to_put(monkeypatch):
    monkeypatch.delenv(backend_module.WRITE_STRATEGY_ENV_VAR, raising=False)

    assert backend_module.resolve_write_strategy() == "put"


def test_resolve_write_strategy_reads_environment(monkeypatch):
    monkeypatch.setenv(backend_module.WRITE_STRATEGY_ENV_VAR, "direct")

    assert backend_module.resolve_write_strategy() == "direct"


def test_explicit_strategy_beats_environment(monkeypatch):
    monkeypatch.setenv(backend_module.WRITE_STRATEGY_ENV_VAR, "direct")

    assert backend_module.resolve_write_strategy("put") == "put"


def test_document_context_uses_environment_strategy(monkeypatch):
    monkeypatch.setenv(backend_module.WRITE_STRATEGY_ENV_VAR, "direct")

    context = DocumentContext.parse("{}")

    assert context.write_strategy == "direct"


def test_document_context_rejects_invalid_environment_strategy(monkeypatch):
    monkeypatch.setenv(backend_module.WRITE_STRATEGY_ENV_VAR, "teleport")

    with pytest.raises(ValueError):
        DocumentContext.parse("{}")
