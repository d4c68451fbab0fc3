import json
from unittest.mock import patch

from click.testing import CliRunner

from promptcraft.cli import cli, format_enhancement


def test_cli_help():
    runner = CliRunner()
    result = runner.invoke(cli, ["--help"])
    assert result.exit_code == 0
    assert "PromptCraft" in result.output


def test_cli_version():
    result = CliRunner().invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert "1.0.0" in result.output


def test_enhance_text_output():
    runner = CliRunner()
    result = runner.invoke(
        cli, ["enhance", "write a story about a dragon", "--length", "concise", "--no-llm"]
    )
    assert result.exit_code == 0
    assert "CHARACTER REQUIREMENTS" in result.output
    assert "800-1200 words" in result.output
    assert "Type: creative_writing" in result.output
    assert "Source: template" in result.output


def test_enhance_json_output():
    runner = CliRunner()
    result = runner.invoke(
        cli,
        ["enhance", "build an iphone app for notes", "--detail-level", "architecture", "--json"],
    )
    assert result.exit_code == 0
    payload = json.loads(result.output)
    assert payload["metadata"]["requestType"] == "app_development"
    assert payload["metadata"]["source"] == "template"
    assert "IMPLEMENTATION ROADMAP" in payload["enhancedPrompt"]


def test_enhance_writes_output_file(tmp_path):
    target = tmp_path / "prompt.txt"
    result = CliRunner().invoke(cli, ["enhance", "hello there", "--no-llm", "-o", str(target)])
    assert result.exit_code == 0
    assert "saved to" in result.output
    assert "Hello there" in target.read_text(encoding="utf-8")


def test_enhance_rejects_blank_prompt():
    result = CliRunner().invoke(cli, ["enhance", "   ", "--no-llm"])
    assert result.exit_code == 1
    assert "MISSING_PROMPT" in result.output


def test_enhance_rejects_unknown_tone():
    result = CliRunner().invoke(cli, ["enhance", "hello", "--tone", "sarcastic"])
    assert result.exit_code == 2


def test_classify_text_output():
    result = CliRunner().invoke(cli, ["classify", "write a haiku about autumn rain"])
    assert result.exit_code == 0
    assert "Type: poetry" in result.output
    assert "Subject: autumn rain" in result.output
    assert "form: haiku" in result.output
    assert "Story elements:" in result.output


def test_classify_json_output():
    result = CliRunner().invoke(
        cli, ["classify", "my api call keeps returning a 500 error, fix it", "--json"]
    )
    assert result.exit_code == 0
    payload = json.loads(result.output)
    assert payload["type"] == "debugging"
    assert "elements" not in payload


@patch("promptcraft.http_server.run_http_server")
def test_server_command(mock_run):
    result = CliRunner().invoke(cli, ["server", "--host", "0.0.0.0", "--port", "9000"])
    assert result.exit_code == 0
    mock_run.assert_called_once_with(host="0.0.0.0", port=9000)


def test_format_enhancement():
    text = format_enhancement(
        {
            "enhancedPrompt": "BODY",
            "metadata": {
                "requestType": "general",
                "source": "llm",
                "model": "m1",
                "inputLength": 5,
                "outputLength": 4,
            },
        }
    )
    assert text.startswith("BODY")
    assert "Model: m1" in text
    assert "5 -> 4 chars" in text
