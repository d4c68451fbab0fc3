import json
import logging
import sys

import pytest

from promptcraft.utils.logging_config import build_formatter, setup_logging


def _record(message, *args, exc_info=None):
    return logging.LogRecord(
        name="promptcraft.tools.enhance_prompt",
        level=logging.WARNING,
        pathname=__file__,
        lineno=1,
        msg=message,
        args=args,
        exc_info=exc_info,
    )


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield root
    for handler in root.handlers[:]:
        root.removeHandler(handler)
        handler.close()
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)


def test_json_output_survives_quotes():
    line = build_formatter("json").format(_record('LLM failed: "%s"', "down"))
    payload = json.loads(line)
    assert payload["message"] == 'LLM failed: "down"'
    assert payload["level"] == "WARNING"
    assert payload["module"] == "promptcraft.tools.enhance_prompt"
    assert "time" in payload


def test_json_output_includes_traceback():
    try:
        raise ValueError("boom")
    except ValueError:
        line = build_formatter("json").format(_record("failed", exc_info=sys.exc_info()))
    payload = json.loads(line)
    assert "ValueError: boom" in payload["exc_info"]


def test_text_output():
    line = build_formatter("text").format(_record("plain message"))
    assert line.endswith("promptcraft.tools.enhance_prompt - WARNING - plain message")


def test_setup_logging_writes_json_file(tmp_path, restore_root_logger):
    log_file = tmp_path / "logs" / "promptcraft.log"
    setup_logging(log_level="DEBUG", log_file=str(log_file), log_format="json")

    logging.getLogger("promptcraft.test").info('cache "hit"')
    for handler in restore_root_logger.handlers:
        handler.flush()

    lines = log_file.read_text(encoding="utf-8").strip().splitlines()
    assert json.loads(lines[-1])["message"] == 'cache "hit"'
    assert restore_root_logger.level == logging.DEBUG
