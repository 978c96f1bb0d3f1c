"""Tests for options and structlog configuration."""

from __future__ import annotations

import json
import logging
from collections.abc import Generator

import pytest
import structlog
from pydantic import ValidationError

from idxnet.config import GraphOptions, configure_logging
from idxnet.core.graph import DiGraph


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """Restore root logger state after each test."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    idx = logging.getLogger("idxnet")
    idx_level = idx.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    idx.setLevel(idx_level)


class TestGraphOptions:
    def test_defaults(self) -> None:
        opts = GraphOptions()
        assert opts.recycle_indices is True
        assert opts.history is True
        assert opts.vertex_capacity == 0

    def test_frozen(self) -> None:
        opts = GraphOptions()
        with pytest.raises(ValidationError):
            opts.history = False

    def test_resolve_merges_overrides(self) -> None:
        base = GraphOptions(history=False)
        merged = GraphOptions.resolve(base, edge_capacity=16)
        assert merged.history is False
        assert merged.edge_capacity == 16
        assert GraphOptions.resolve(base) is base

    def test_unknown_key_rejected(self) -> None:
        with pytest.raises(ValidationError):
            GraphOptions.resolve(None, recycle=True)


class TestConfigureLogging:
    def test_verbose_enables_debug(self) -> None:
        configure_logging(verbose=True, log_json=False)
        assert logging.getLogger("idxnet").level == logging.DEBUG
        assert logging.getLogger().level == logging.WARNING

    def test_non_verbose_sets_warning(self) -> None:
        configure_logging(verbose=False, log_json=False)
        assert logging.getLogger("idxnet").level == logging.WARNING

    def test_configure_twice_keeps_one_handler(self) -> None:
        configure_logging()
        configure_logging()
        assert len(logging.getLogger().handlers) == 1

    def test_json_mode_output(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        log = structlog.get_logger("idxnet.test")
        log.warning("json test", answer=42)
        captured = capfd.readouterr()
        parsed = json.loads(captured.err.strip())
        assert parsed["event"] == "json test"
        assert parsed["answer"] == 42
        assert parsed["level"] == "warning"
        assert parsed["logger"] == "idxnet.test"
        assert "timestamp" in parsed

    def test_library_debug_messages_are_structured(
        self, capfd: pytest.CaptureFixture[str]
    ) -> None:
        configure_logging(verbose=True, log_json=True)
        G = DiGraph()
        a = G.add_vertex()
        G.remove_vertex(a)

        lines = [json.loads(line) for line in capfd.readouterr().err.strip().splitlines()]
        loggers = {line["logger"] for line in lines}
        assert "idxnet.core.graph" in loggers
        assert all(line["level"] == "debug" for line in lines)
