"""CLI interface for PromptCraft."""

import asyncio
import json
from pathlib import Path
from typing import Any, Dict, Optional

import click
from dotenv import load_dotenv

from . import __version__
from .engine.entities import extract_story_elements
from .engine.models import DetailLevel, Length, RequestType, Tone
from .engine.orchestrator import get_orchestrator
from .tools import enhance_prompt_tool
from .utils.exceptions import PromptValidationError
from .utils.llm_client import LLMClient
from .utils.store import create_store

# Load environment variables
load_dotenv()


@click.group()
@click.version_option(version=__version__)
def cli():
    """PromptCraft: turn rough ideas into structured prompts."""
    pass


@cli.command()
@click.argument("prompt")
@click.option(
    "--tone",
    "-t",
    default=Tone.PROFESSIONAL.value,
    type=click.Choice([t.value for t in Tone]),
    help="Tone of the enhanced prompt",
)
@click.option(
    "--length",
    "-l",
    default=Length.BALANCED.value,
    type=click.Choice([length.value for length in Length]),
    help="Target length tier",
)
@click.option("--model", "-m", default="all", help="Target model family (chatgpt, claude, ...)")
@click.option(
    "--detail-level",
    "-d",
    default=DetailLevel.FULL_CODE.value,
    type=click.Choice([d.value for d in DetailLevel]),
    help="How much of a development template to render",
)
@click.option("--llm/--no-llm", "use_llm", default=True, help="Polish with the configured LLM")
@click.option("--output", "-o", type=click.Path(), help="Output file (default: stdout)")
@click.option("--json", "output_json", is_flag=True, help="Output raw JSON")
def enhance(
    prompt: str,
    tone: str,
    length: str,
    model: str,
    detail_level: str,
    use_llm: bool,
    output: Optional[str],
    output_json: bool,
):
    """Enhance PROMPT into a structured prompt."""

    async def run_enhancement() -> Dict[str, Any]:
        llm_client = LLMClient() if use_llm else None
        store = create_store()
        await store.initialize()

        try:
            return await enhance_prompt_tool(
                arguments={
                    "prompt": prompt,
                    "tone": tone,
                    "length": length,
                    "model": model,
                    "detail_level": detail_level,
                    "use_llm": use_llm,
                },
                llm_client=llm_client,
                cache=store,
            )
        finally:
            if llm_client:
                await llm_client.close()
            await store.close()

    try:
        result = asyncio.run(run_enhancement())
    except PromptValidationError as e:
        raise click.ClickException(f"{e} ({e.code})")

    if output_json:
        output_text = json.dumps(result, indent=2, ensure_ascii=False)
    else:
        output_text = format_enhancement(result)

    if output:
        Path(output).write_text(output_text, encoding="utf-8")
        click.echo(f"Enhanced prompt saved to {output}")
    else:
        click.echo(output_text)


@cli.command()
@click.argument("prompt")
@click.option("--json", "output_json", is_flag=True, help="Output raw JSON")
def classify(prompt: str, output_json: bool):
    """Show how PROMPT is classified."""
    engine = get_orchestrator()
    try:
        normalized = engine.normalizer.normalize(engine.validate(prompt))
    except PromptValidationError as e:
        raise click.ClickException(f"{e} ({e.code})")

    intent = engine.classifier.classify(normalized)
    result = intent.to_dict()
    if intent.type in (RequestType.CREATIVE_WRITING, RequestType.POETRY):
        result["elements"] = extract_story_elements(normalized).to_dict()

    if output_json:
        click.echo(json.dumps(result, indent=2, ensure_ascii=False))
        return

    click.echo(f"Type: {result['type']}")
    click.echo(f"{result['slot'].capitalize()}: {result['subject']}")
    for key, value in result["details"].items():
        if value:
            click.echo(f"  {key}: {_join(value)}")
    if "elements" in result:
        click.echo("Story elements:")
        for key, value in result["elements"].items():
            click.echo(f"  {key}: {_join(value) or '-'}")


@cli.command()
@click.option("--host", default=None, help="Bind address (default: HTTP_HOST or 127.0.0.1)")
@click.option("--port", default=None, type=int, help="HTTP port (default: HTTP_PORT or 8080)")
def server(host: Optional[str], port: Optional[int]):
    """Start the HTTP API."""
    from .http_server import run_http_server

    click.echo(f"Starting PromptCraft HTTP server on {host or 'default host'}:{port or 'default port'}...")
    run_http_server(host=host, port=port)


def _join(value: Any) -> str:
    if isinstance(value, (list, tuple)):
        return ", ".join(str(v) for v in value)
    return str(value)


def format_enhancement(result: dict) -> str:
    """Format an enhancement result for human readability."""
    metadata = result.get("metadata", {})
    output = [result.get("enhancedPrompt", ""), ""]

    output.append("Metadata:")
    output.append(f"  Type: {metadata.get('requestType', 'N/A')}")
    output.append(f"  Source: {metadata.get('source', 'N/A')}")
    if metadata.get("model"):
        output.append(f"  Model: {metadata['model']}")
    output.append(
        f"  Length: {metadata.get('inputLength', 0)} -> {metadata.get('outputLength', 0)} chars"
    )

    return "\n".join(output)


def main():
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
