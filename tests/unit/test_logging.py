"""Unit tests for build logging and structured build records."""

import json
import logging

import yaml

from grammar_gen.io import log_json, log_record, log_yaml
from grammar_gen.pipeline import BuildLogger, ColoredFormatter


class TestBuildLogger:
    """Tests for BuildLogger class."""

    def test_init_creates_log_dir(self, tmp_path):
        """Test logger initialization with a log directory."""
        build_logger = BuildLogger(str(tmp_path / "logs"), log_name="test_build")
        assert build_logger.log_dir.exists()
        assert build_logger.log_file.name.startswith("grammar_gen_")

    def test_console_only(self):
        """Test that no file handler is added without a log directory."""
        build_logger = BuildLogger(log_name="test_build_console")
        build_logger.setup()
        assert build_logger.log_file is None
        assert len(build_logger.logger.handlers) == 1

    def test_setup(self, tmp_path):
        """Test logger setup with file and console handlers."""
        build_logger = BuildLogger(str(tmp_path / "logs"), log_name="test_build")
        build_logger.setup()
        assert len(build_logger.logger.handlers) == 2

    def test_build_messages_reach_file(self, tmp_path):
        """Test the framing messages of a pass."""
        build_logger = BuildLogger(str(tmp_path / "logs"), log_name="test_build_file")
        build_logger.setup()
        build_logger.log_build_start(tmp_path / "src")
        build_logger.log_build_complete(2, 1.5)
        build_logger.log_build_error("ANTLR caught 1 build errors.")
        for handler in build_logger.logger.handlers:
            handler.flush()

        text = build_logger.log_file.read_text()
        assert "Generating grammar sources from" in text
        assert "Processed 2 grammar(s) successfully in 1.5s" in text
        assert "Grammar generation failed: ANTLR caught 1 build errors." in text

    def test_format_duration_seconds(self):
        """Test duration formatting for seconds."""
        assert BuildLogger.format_duration(45.2) == "45.2s"

    def test_format_duration_minutes(self):
        """Test duration formatting for minutes."""
        assert BuildLogger.format_duration(125) == "2m 5s"

    def test_format_duration_hours(self):
        """Test duration formatting for hours."""
        assert BuildLogger.format_duration(7300) == "2h 1m"

    def test_colored_formatter_restores_levelname(self):
        """Test that coloring does not leak into other handlers."""
        formatter = ColoredFormatter("%(levelname)s %(message)s", "%H:%M:%S", BuildLogger.COLORS)
        record = logging.LogRecord("x", logging.ERROR, __file__, 1, "boom", None, None)
        assert formatter.format(record).startswith(BuildLogger.COLORS["ERROR"])
        assert record.levelname == "ERROR"


class TestBuildRecords:
    """Tests for structured build records."""

    def test_log_json_appends_lines(self, tmp_path):
        """Test that each record is one JSON line."""
        path = tmp_path / "out" / "records.jsonl"
        log_json(path, {"status": "success"})
        log_json(path, {"status": "failed"})
        lines = path.read_text().splitlines()
        assert [json.loads(line)["status"] for line in lines] == ["success", "failed"]

    def test_log_yaml_documents(self, tmp_path):
        """Test that YAML records are separated documents."""
        path = tmp_path / "records.yaml"
        log_yaml(path, {"status": "success"})
        docs = [d for d in yaml.safe_load_all(path.read_text()) if d]
        assert docs == [{"status": "success"}]

    def test_log_record_picks_format(self, tmp_path):
        """Test that the file suffix decides the record format."""
        log_record(tmp_path / "r.yml", {"a": 1})
        log_record(tmp_path / "r.json", {"a": 1})
        assert (tmp_path / "r.yml").read_text().startswith("a: 1")
        assert json.loads((tmp_path / "r.json").read_text()) == {"a": 1}
