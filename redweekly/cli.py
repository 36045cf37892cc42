from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path

import typer

from redweekly.core.config import ConfigError, RedweeklyConfig, load_config
from redweekly.core.factory import build_annotator, build_report_service
from redweekly.core.window import current_week, resolve_window
from redweekly.errors import ReportError
from redweekly.llm.errors import LLMError

app = typer.Typer(help="Weekly Redmine time-entry reports")
llm_app = typer.Typer(help="Inspect summary model configuration")

app.add_typer(llm_app, name="llm")


def _load(config_path: Path | None) -> RedweeklyConfig:
    try:
        return load_config(path=config_path)
    except ConfigError as exc:
        typer.echo(f"config error: {exc}")
        raise typer.Exit(code=1)


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@app.command("report")
def report_command(
    from_date: str | None = typer.Option(None, "--from", help="Window start (YYYY-MM-DD)"),
    to_date: str | None = typer.Option(None, "--to", help="Window end (YYYY-MM-DD)"),
    user: str | None = typer.Option(None, "--user", help="Redmine user id (default from config, 'me')"),
    base_url: str | None = typer.Option(None, "--base-url", help="Redmine base URL override"),
    key: str = typer.Option(
        ...,
        "--key",
        envvar="REDMINE_API_KEY",
        prompt="Redmine API key",
        hide_input=True,
        help="Redmine API key",
    ),
    no_summary: bool = typer.Option(False, "--no-summary", help="Skip the model summary paragraph"),
    config_path: Path | None = typer.Option(None, "--config", help="Path to config.yml"),
) -> None:
    """Print the HTML report for a window (default: this Sunday-Saturday week)."""
    cfg = _load(config_path)
    _configure_logging(cfg.log_level)
    if base_url:
        cfg = cfg.model_copy(update={"redmine": cfg.redmine.model_copy(update={"base_url": base_url})})

    try:
        window = resolve_window(from_date, to_date, now=datetime.now().astimezone())
        service = build_report_service(cfg, api_key=key, with_summary=not no_summary)
        result = service.generate(user_id=user or cfg.redmine.user_id, window=window)
    except ReportError as exc:
        typer.echo(f"report failed: {exc}")
        raise typer.Exit(code=1)

    typer.echo(result.text, nl=not result.text.endswith("\n"))


@app.command("week")
def week_command() -> None:
    """Show the default reporting window."""
    window = current_week(datetime.now().astimezone())
    typer.echo(f"{window.from_date.isoformat()} {window.to_date.isoformat()}")


@llm_app.command("doctor")
def llm_doctor(
    ping: bool = typer.Option(False, "--ping", help="Send a short test prompt to the endpoint"),
    config_path: Path | None = typer.Option(None, "--config", help="Path to config.yml"),
) -> None:
    """Validate summary model configuration."""
    cfg = _load(config_path)
    llm = cfg.llm

    typer.echo(f"endpoint: {llm.endpoint or '<unset>'}")
    typer.echo(f"model: {llm.model or '<unset>'}")
    typer.echo(f"api_key: {'<set>' if llm.api_key else '<unset>'}")
    typer.echo(f"max_retries: {llm.max_retries}")
    typer.echo(f"retry_backoff_seconds: {llm.retry_backoff_seconds}")

    annotator = build_annotator(llm)
    if annotator is None:
        typer.echo("llm doctor: DISABLED - set AI_ENDPOINT, AI_API_KEY and AI_API_MODEL to enable summaries")
        raise typer.Exit(code=1)

    if ping:
        try:
            annotator.summarize("<h4>Ping</h4>\n<ul>\n<li><h5>一. Connectivity check (issue: 0, 0h)</h5></li>\n</ul>\n")
        except LLMError as exc:
            typer.echo(f"llm doctor: FAILED - {exc}")
            raise typer.Exit(code=1)

    typer.echo("llm doctor: OK")


@app.command("web")
def web_command(
    host: str = typer.Option("127.0.0.1", "--host", help="Interface to bind"),
    port: int = typer.Option(8787, "--port", help="Port to serve on"),
    config_path: Path | None = typer.Option(None, "--config", help="Path to config.yml"),
) -> None:
    """Serve the report form and POST endpoint."""
    try:
        import uvicorn

        from redweekly.web.app import create_app
    except ImportError:
        typer.echo("Web UI requires: pip install redweekly[web]")
        raise typer.Exit(code=1)

    cfg = _load(config_path)
    _configure_logging(cfg.log_level)
    typer.echo(f"starting redweekly web on http://{host}:{port}")
    uvicorn.run(create_app(config=cfg), host=host, port=port, log_level=cfg.log_level.lower())


def main() -> None:
    app()


if __name__ == "__main__":
    main()
