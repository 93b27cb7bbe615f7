"""Command line interface for podstudio."""

import asyncio
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import typer
from aiohttp import web
from botocore.exceptions import BotoCoreError
from rich.console import Console
from rich.table import Table

from .config import SecureKeyManager, StorageBackend, settings
from .errors import PodcastError
from .handler import create_handler
from .models.conversation import ConversationTurn
from .models.persona import Persona
from .server import FILES_ROUTE, create_app
from .services.llm import TurnGenerator, create_llm_service
from .services.voices import VOICE_TABLE

app = typer.Typer(help="Render multi-persona conversations to podcasts.")
console = Console()

logger = logging.getLogger(__name__)

def load_conversation(path: Path) -> Dict[str, Any]:
    """Load a {persons, turns} JSON document."""
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        console.print(f"[red]Could not read {path}: {e}")
        raise typer.Exit(1)
    if not isinstance(data, dict):
        console.print(f"[red]{path} must contain a JSON object")
        raise typer.Exit(1)
    return data

@app.callback()
def main(debug: bool = typer.Option(False, help="Enable debug output")):
    """Configure logging for every command."""
    if debug:
        settings.log_level = "DEBUG"
    settings.setup_logging()

@app.command()
def render(
    conversation_file: Path = typer.Argument(..., help="JSON file with persons and turns"),
    request_id: Optional[str] = typer.Option(None, help="Identifier used for the output key"),
    storage: Optional[StorageBackend] = typer.Option(
        None,
        help="Where to publish the podcast (overrides STORAGE_BACKEND)"
    ),
):
    """Synthesize a conversation and publish the podcast."""
    data = load_conversation(conversation_file)

    async def run() -> str:
        handler = create_handler(storage_backend=storage)
        request = handler.parse_request(data)
        rid = request_id or settings.paths.new_request_id()

        with console.status(f"Synthesizing {len(request.turns)} turns..."):
            audio = await handler.pipeline.render(request.persons, request.turns)
        with console.status("Publishing podcast..."):
            return await handler.publisher.publish(audio, rid)

    try:
        url = asyncio.run(run())
    except (PodcastError, BotoCoreError, ValueError) as e:
        logger.debug("Render failed", exc_info=True)
        console.print(f"[red]Error: {e}")
        raise typer.Exit(1)

    console.print(f"[green]Podcast published: {url}")

@app.command()
def voices():
    """List the voice assigned to each voice character and sex."""
    table = Table("Voice character", "Sex", "Voice")
    for (character, sex), voice_id in VOICE_TABLE.items():
        table.add_row(character.value, sex.value, voice_id)
    console.print(table)

@app.command("next-turn")
def next_turn(
    conversation_file: Path = typer.Argument(..., help="JSON file with persons and turns"),
    persona_id: str = typer.Option(..., "--persona", help="Id of the persona that speaks next"),
    write: bool = typer.Option(False, help="Append the generated turn to the file"),
):
    """Generate the next utterance for a persona with the configured LLM."""
    data = load_conversation(conversation_file)
    try:
        personas: List[Persona] = [Persona.model_validate(p) for p in data.get("persons") or []]
        history: List[ConversationTurn] = [
            ConversationTurn.model_validate(t) for t in data.get("turns") or []
        ]
    except ValueError as e:
        console.print(f"[red]Invalid conversation file: {e}")
        raise typer.Exit(1)

    persona = next((p for p in personas if p.id == persona_id), None)
    if persona is None:
        console.print(f"[red]Persona not found: {persona_id}")
        raise typer.Exit(1)

    api_key = settings.get_openai_api_key(prompt_if_missing=True)
    if not api_key:
        console.print("[red]OpenAI API key is required but not available")
        raise typer.Exit(1)

    generator = TurnGenerator(
        create_llm_service(api_key, settings.llm_model, top_p=settings.llm_top_p),
        temperature=settings.llm_temperature,
        max_tokens=settings.llm_max_tokens
    )

    try:
        with console.status(f"Writing {persona.name}'s turn..."):
            turn = asyncio.run(generator.next_turn(persona, history, personas))
    except PodcastError as e:
        console.print(f"[red]Error: {e}")
        raise typer.Exit(1)

    console.print(f"[bold]{persona.name}:[/bold] {turn.text}")

    if write:
        data.setdefault("turns", []).append(turn.model_dump(by_alias=True))
        conversation_file.write_text(json.dumps(data, indent=2), encoding="utf-8")
        console.print(f"[green]Appended turn {turn.id} to {conversation_file}")

@app.command()
def serve(
    host: Optional[str] = typer.Option(None, help="Bind address (overrides SERVER_HOST)"),
    port: Optional[int] = typer.Option(None, help="Port (overrides SERVER_PORT)"),
    storage: Optional[StorageBackend] = typer.Option(
        None,
        help="Where to publish podcasts (overrides STORAGE_BACKEND)"
    ),
):
    """Run the HTTP API."""
    host = host or settings.server_host
    port = port or settings.server_port
    backend = storage or settings.storage_backend

    app_settings = settings
    static_dir = None
    if backend == StorageBackend.LOCAL:
        static_dir = settings.paths.get_path("output")
        if not settings.public_base_url:
            url_host = "localhost" if host in ("0.0.0.0", "::") else host
            app_settings = settings.model_copy(
                update={"public_base_url": f"http://{url_host}:{port}{FILES_ROUTE}"}
            )

    try:
        handler = create_handler(app_settings, storage_backend=backend)
    except ValueError as e:
        console.print(f"[red]Error: {e}")
        raise typer.Exit(1)

    console.print(f"[green]Serving on http://{host}:{port}/generate-podcast")
    web.run_app(create_app(handler, static_dir), host=host, port=port, print=None)

@app.command("setup-key")
def setup_key():
    """Store the OpenAI API key in the system keyring."""
    service_name = settings.openai_api_key_ref or "openai-api"
    if SecureKeyManager.prompt_for_key(service_name, force_input=True):
        console.print(f"[green]Stored key as {service_name!r}")
        if not settings.openai_api_key_ref:
            console.print(f"Set OPENAI_API_KEY_REF={service_name} to use it")
    else:
        console.print("[yellow]No key stored")

if __name__ == "__main__":
    app()
