"""CLI interface for presswire."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Annotated, Any, Optional

import typer
from pydantic import BaseModel
from rich.console import Console
from rich.table import Table

from presswire.brands import Brand
from presswire.config import load_config
from presswire.content.models import Platform
from presswire.errors import ContentNotFoundError, PrimaryTransitionError
from presswire.logging_setup import configure_logging
from presswire.orchestrator import PublishRequest
from presswire.result import Err, Ok
from presswire.services import Services, build_services

app = typer.Typer(
    name="presswire",
    help="Publish articles across the network and fan out their effects.",
)

console = Console()

ConfigOption = Annotated[
    Optional[Path],
    typer.Option("--config", "-c", help="Path to a .presswire.toml file."),
]


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        from presswire import __version__

        console.print(f"presswire {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            "-v",
            help="Show version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = False,
) -> None:
    """presswire - publish fan-out for the media network."""


def _services(config_path: Path | None) -> Services:
    configure_logging()
    return build_services(load_config(config_path))


def _print(value: Any) -> None:
    if isinstance(value, BaseModel):
        value = value.model_dump(mode="json")
    elif isinstance(value, list):
        value = [v.model_dump(mode="json") if isinstance(v, BaseModel) else v for v in value]
    console.print_json(json.dumps(value))


def _fail(err: Err) -> None:
    console.print(f"[red]Error:[/red] {err.describe()}")
    raise typer.Exit(1)


@app.command()
def publish(
    article_id: Annotated[str, typer.Argument(help="Article id to publish.")],
    cross_post: Annotated[
        Optional[list[Brand]],
        typer.Option("--cross-post", "-x", help="Also replicate into this brand."),
    ] = None,
    share: Annotated[
        Optional[list[Platform]],
        typer.Option("--share", "-s", help="Also share to this platform."),
    ] = None,
    config: ConfigOption = None,
) -> None:
    """Publish an article and launch its effects.

    Background effects are waited for before the command exits.
    """
    services = _services(config)
    try:
        item = services.orchestrator.publish(
            article_id,
            PublishRequest(cross_post_to=cross_post or [], share_to=share or []),
        )
        _print(item)
    except ContentNotFoundError as exc:
        console.print(f"[red]Error:[/red] {exc}")
        raise typer.Exit(1) from exc
    except PrimaryTransitionError as exc:
        console.print(f"[red]Publish failed:[/red] {exc}")
        raise typer.Exit(1) from exc
    finally:
        services.shutdown()


@app.command()
def tts(
    article_id: Annotated[str, typer.Argument(help="Article id to narrate.")],
    config: ConfigOption = None,
) -> None:
    """Generate the narration for an article."""
    services = _services(config)
    match services.audio.trigger(article_id):
        case Ok(outcome):
            console.print(outcome.message)
            _print(outcome.audio_version)
        case Err() as err:
            _fail(err)


@app.command("share")
def share_cmd(
    article_id: Annotated[str, typer.Argument(help="Article id to share.")],
    platform: Annotated[
        list[Platform],
        typer.Option("--platform", "-p", help="Platform to post to."),
    ],
    brand: Annotated[
        Optional[Brand],
        typer.Option("--brand", "-b", help="Brand to share as (defaults to the article's)."),
    ] = None,
    text: Annotated[
        Optional[str],
        typer.Option("--text", help="Custom template overriding the platform default."),
    ] = None,
    config: ConfigOption = None,
) -> None:
    """Share an article to social platforms."""
    services = _services(config)
    try:
        item = services.store.get_item(article_id)
    except ContentNotFoundError as exc:
        console.print(f"[red]Error:[/red] {exc}")
        raise typer.Exit(1) from exc
    result = services.social.share(
        article_id, brand or item.brand, platform, custom_text=text, include_auto=False
    )
    match result:
        case Ok(results):
            _print(results)
        case Err() as err:
            _fail(err)


@app.command("send-campaign")
def send_campaign(
    campaign_id: Annotated[str, typer.Argument(help="Newsletter campaign id.")],
    config: ConfigOption = None,
) -> None:
    """Send a newsletter campaign to its brand's subscribers."""
    services = _services(config)
    match services.newsletter.send_campaign(campaign_id):
        case Ok(outcome):
            console.print(
                f"Sent to [green]{outcome.sent_count}[/green] of "
                f"{outcome.total_subscribers} subscribers"
            )
        case Err() as err:
            _fail(err)


@app.command("share-log")
def share_log(
    article_id: Annotated[Optional[str], typer.Option("--article", "-a")] = None,
    brand: Annotated[Optional[Brand], typer.Option("--brand", "-b")] = None,
    config: ConfigOption = None,
) -> None:
    """Show recent social share attempts."""
    services = _services(config)
    rows = services.store.list_share_log(article_id=article_id, brand=brand)
    table = Table(title="Social share log")
    for column in ("shared_at", "article", "brand", "platform", "status", "post_url / error"):
        table.add_column(column)
    for row in rows:
        table.add_row(
            row.shared_at.strftime("%Y-%m-%d %H:%M:%S"),
            row.article_id,
            str(row.brand),
            str(row.platform),
            str(row.status),
            row.post_url or row.error_message or "",
        )
    console.print(table)


@app.command()
def serve(
    host: Annotated[str, typer.Option(help="Bind address.")] = "127.0.0.1",
    port: Annotated[int, typer.Option(help="Bind port.")] = 8000,
    config: ConfigOption = None,
) -> None:
    """Run the HTTP API."""
    import uvicorn

    from presswire.api import create_app

    services = _services(config)
    uvicorn.run(create_app(services), host=host, port=port, log_config=None)


if __name__ == "__main__":
    app()
