"""Tests for plotscript.utils: atomic writes, YAML loading, logging setup."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest
import yaml

from plotscript.utils import fs
from plotscript.utils.logging_config import (
    ContextFormatter,
    pop_context,
    push_context,
    setup_logging,
)


# ---------------------------------------------------------------------------
# Filesystem
# ---------------------------------------------------------------------------


class TestFs:
    def test_atomic_write_text_creates_parents(self, tmp_path: Path) -> None:
        target = tmp_path / "a" / "b" / "fig.gp"
        fs.atomic_write_text(target, "quit\n")
        assert target.read_text(encoding="utf-8") == "quit\n"
        assert not target.with_suffix(".gp.tmp").exists()

    def test_atomic_write_overwrites(self, tmp_path: Path) -> None:
        target = tmp_path / "fig.gp"
        fs.atomic_write_text(target, "old\n")
        fs.atomic_write_text(target, "new\n")
        assert target.read_text(encoding="utf-8") == "new\n"

    def test_load_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "d.yaml"
        path.write_text("title: T\ngraphs: []\n", encoding="utf-8")
        assert fs.load_yaml(path) == {"title": "T", "graphs": []}

    def test_load_yaml_missing(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            fs.load_yaml(tmp_path / "nope.yaml")

    def test_load_yaml_invalid(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.yaml"
        path.write_text("a: [1, 2\n", encoding="utf-8")
        with pytest.raises(yaml.YAMLError, match="Failed to parse"):
            fs.load_yaml(path)


# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------


def _record(msg: str = "compiled 3 graphs") -> logging.LogRecord:
    return logging.LogRecord(
        name="plotscript.script.document",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg=msg,
        args=(),
        exc_info=None,
    )


@pytest.fixture()
def clean_context():
    pop_context()
    yield
    pop_context()


class TestLogging:
    def test_human_format_with_context(self, clean_context) -> None:
        push_context(document="fig.yaml")
        line = ContextFormatter("human", use_color=False).format(_record())
        assert "| INFO" in line
        assert "document=fig.yaml |" in line
        assert line.endswith("compiled 3 graphs")

    def test_json_format(self, clean_context) -> None:
        push_context(app="compile_plot")
        entry = json.loads(ContextFormatter("json").format(_record()))
        assert entry["lvl"] == "INFO"
        assert entry["msg"] == "compiled 3 graphs"
        assert entry["app"] == "compile_plot"

    def test_pop_selected_keys(self, clean_context) -> None:
        push_context(a=1, b=2)
        pop_context(keys=["a"])
        line = ContextFormatter("human", use_color=False).format(_record())
        assert "b=2" in line
        assert "a=1" not in line

    def test_unknown_format_mode(self) -> None:
        with pytest.raises(ValueError):
            ContextFormatter("xml")

    def test_setup_is_idempotent(self, tmp_path: Path) -> None:
        root = logging.getLogger()
        before = list(root.handlers)
        level = root.level
        try:
            log_file = str(tmp_path / "logs" / "plot.log")
            setup_logging("DEBUG", log_file)
            handlers = setup_logging("DEBUG", log_file)
            added = [h for h in root.handlers if h not in before]
            assert added == handlers
            assert len(added) == 2
            logging.getLogger("plotscript.test").debug("hello file")
            handlers[-1].flush()
            assert "hello file" in (tmp_path / "logs" / "plot.log").read_text()
        finally:
            for h in root.handlers[:]:
                if h not in before:
                    root.removeHandler(h)
                    h.close()
            root.setLevel(level)
            logging.captureWarnings(False)

    def test_bad_level(self) -> None:
        with pytest.raises(ValueError, match="Unknown log level"):
            setup_logging("LOUD")

