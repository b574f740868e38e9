"""Stowage CLI actor implemented with Typer."""

from __future__ import annotations

import json
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable

import typer

from packages.stowage_shared.blobs import BlobId, BlobMeta
from packages.stowage_shared.config import load_settings
from packages.stowage_shared.errors import ErrorCategory, exception_to_error
from packages.stowage_shared.logging import configure_logging
from resources.substrates.filesystem import (
    FilesystemHealthStatus,
    LocalFilesystemBlobSubstrate,
    build_component,
)

SUCCESS_EXIT_CODE = 0
VALIDATION_ERROR_EXIT_CODE = 2
NOT_FOUND_EXIT_CODE = 3
IO_ERROR_EXIT_CODE = 4

_STDIO_MARKER = "-"
_EXIT_CODES_BY_CATEGORY = {
    ErrorCategory.VALIDATION: VALIDATION_ERROR_EXIT_CODE,
    ErrorCategory.NOT_FOUND: NOT_FOUND_EXIT_CODE,
}


@dataclass(frozen=True)
class CliConfig:
    """Global CLI runtime options propagated to commands."""

    storage: LocalFilesystemBlobSubstrate
    as_json: bool


def _serialize(value: Any) -> Any:
    """Convert result objects to JSON-serializable structures."""

    if value is None or isinstance(value, (bool, int, float, str)):
        return value
    if isinstance(value, BlobId):
        return {
            "path": value.full_path,
            "folder_path": value.folder_path,
            "name": value.name,
            "kind": value.kind.value,
        }
    if isinstance(value, dict):
        return {str(key): _serialize(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_serialize(item) for item in value]
    if hasattr(value, "model_dump"):
        return _serialize(value.model_dump(mode="json"))
    return str(value)


def _emit_output(result: Any, as_json: bool) -> None:
    """Render command output in requested format."""

    data = _serialize(result)
    if as_json:
        typer.echo(json.dumps(data, sort_keys=True, separators=(",", ":")))
        return
    rendered = _render_human(result)
    typer.echo(rendered if rendered is not None else str(data))


def _emit_error(message: str, as_json: bool, code: str | None = None) -> None:
    """Render one error to stderr."""

    if as_json:
        payload = {"error": message}
        if code is not None:
            payload["code"] = code
        typer.echo(json.dumps(payload), err=True)
        return
    typer.echo(f"error: {message}", err=True)


def _render_human(result: Any) -> str | None:
    """Return human-oriented rendering for recognized result shapes."""
    if isinstance(result, FilesystemHealthStatus):
        state = "healthy" if result.ready else "degraded"
        return f"Filesystem: {state} ({result.detail})"
    if isinstance(result, list) and all(isinstance(item, BlobId) for item in result):
        return _render_listing(result)
    return None


def _render_listing(items: list[BlobId]) -> str:
    """Render listing entries, folders marked with a trailing separator."""
    if len(items) == 0:
        return "No entries found."
    lines: list[str] = []
    for item in items:
        suffix = "/" if item.is_folder else ""
        lines.append(f"{item.full_path}{suffix}")
    return "\n".join(lines)


def _render_rows(blob_ids: list[str], values: list[str]) -> str:
    """Render one ``id<TAB>value`` row per identifier."""
    return "\n".join(f"{blob_id}\t{value}" for blob_id, value in zip(blob_ids, values))


def _run_command(cfg: CliConfig, invoke: Callable[[LocalFilesystemBlobSubstrate], Any]) -> Any:
    """Execute one storage call and map failures to process exit codes."""
    try:
        return invoke(cfg.storage)
    except (ValueError, OSError) as exc:
        error = exception_to_error(exc)
        _emit_error(error.message, cfg.as_json, code=error.code)
        exit_code = _EXIT_CODES_BY_CATEGORY.get(error.category, IO_ERROR_EXIT_CODE)
        raise typer.Exit(code=exit_code) from exc


def _require_config(ctx: typer.Context) -> CliConfig:
    """Return required CLI config from Typer context."""

    config = ctx.obj
    if not isinstance(config, CliConfig):
        raise RuntimeError("CLI configuration not initialized")
    return config


app = typer.Typer(no_args_is_help=True, help="Stowage blob storage command-line interface")


@app.callback()
def main(
    ctx: typer.Context,
    root: str | None = typer.Option(
        None,
        envvar="STOWAGE_ROOT",
        help="Blob root directory (overrides configured root_dir)",
    ),
    config: Path | None = typer.Option(None, help="Path to stowage.yaml"),
    log_level: str = typer.Option("ERROR", help="Log level for stdout logs"),
    as_json: bool = typer.Option(False, "--json", help="Emit JSON output"),
) -> None:
    """Build the configured storage for all commands."""

    cli_params: dict[str, Any] = {"logging": {"level": log_level.upper()}}
    if root is not None:
        cli_params["components"] = {"substrate": {"filesystem": {"root_dir": root}}}
    settings = load_settings(cli_params=cli_params, config_path=config)
    configure_logging(
        level=settings.logging.level,
        json_output=settings.logging.json_output,
        service=settings.logging.service,
        environment=settings.logging.environment,
        stream=sys.stderr,
    )
    ctx.obj = CliConfig(storage=build_component(settings=settings), as_json=as_json)


@app.command("ls")
def list_command(
    ctx: typer.Context,
    folder: str | None = typer.Argument(None, help="Folder path, defaults to root"),
    prefix: str | None = typer.Option(None, help="Only entries starting with prefix"),
    recursive: bool = typer.Option(False, "--recursive", "-r", help="Descend into folders"),
) -> None:
    """List folders and blobs."""
    cfg = _require_config(ctx)
    result = _run_command(
        cfg, lambda storage: storage.list_blobs(folder, prefix, recursive)
    )
    if result is None:
        _emit_error(f"storage root does not exist: {cfg.storage.root}", cfg.as_json)
        raise typer.Exit(code=NOT_FOUND_EXIT_CODE)
    _emit_output(result, cfg.as_json)


@app.command("put")
def put_command(
    ctx: typer.Context,
    blob_id: str = typer.Argument(..., help="Blob identifier"),
    source: str = typer.Argument(_STDIO_MARKER, help="Source file, '-' for stdin"),
    append: bool = typer.Option(False, help="Append instead of replacing"),
) -> None:
    """Store one blob from a file or stdin."""
    cfg = _require_config(ctx)

    def _invoke(storage: LocalFilesystemBlobSubstrate) -> None:
        if source == _STDIO_MARKER:
            storage.write(blob_id, typer.get_binary_stream("stdin"), append=append)
            return
        with Path(source).open("rb") as handle:
            storage.write(blob_id, handle, append=append)

    _run_command(cfg, _invoke)
    if cfg.as_json:
        _emit_output({"written": blob_id}, cfg.as_json)


@app.command("get")
def get_command(
    ctx: typer.Context,
    blob_id: str = typer.Argument(..., help="Blob identifier"),
    output: str = typer.Option(_STDIO_MARKER, "--output", "-o", help="Target file, '-' for stdout"),
) -> None:
    """Write one blob's content to a file or stdout."""
    cfg = _require_config(ctx)

    def _invoke(storage: LocalFilesystemBlobSubstrate) -> bool:
        handle = storage.open_read(blob_id)
        if handle is None:
            return False
        with handle:
            if output == _STDIO_MARKER:
                stdout = typer.get_binary_stream("stdout")
                stdout.write(handle.read())
                stdout.flush()
            else:
                Path(output).write_bytes(handle.read())
        return True

    if not _run_command(cfg, _invoke):
        _emit_error(f"blob not found: {blob_id}", cfg.as_json)
        raise typer.Exit(code=NOT_FOUND_EXIT_CODE)


@app.command("rm")
def delete_command(
    ctx: typer.Context,
    blob_ids: list[str] = typer.Argument(..., help="Blob identifiers"),
) -> None:
    """Delete blobs; missing ones are ignored."""
    cfg = _require_config(ctx)
    _run_command(cfg, lambda storage: storage.delete(blob_ids))
    if cfg.as_json:
        _emit_output({"deleted": blob_ids}, cfg.as_json)


@app.command("exists")
def exists_command(
    ctx: typer.Context,
    blob_ids: list[str] = typer.Argument(..., help="Blob identifiers"),
) -> None:
    """Report whether each blob exists."""
    cfg = _require_config(ctx)
    flags: list[bool] = _run_command(cfg, lambda storage: storage.exists(blob_ids))
    if cfg.as_json:
        _emit_output(dict(zip(blob_ids, flags)), cfg.as_json)
        return
    typer.echo(_render_rows(blob_ids, ["yes" if flag else "no" for flag in flags]))


@app.command("stat")
def stat_command(
    ctx: typer.Context,
    blob_ids: list[str] = typer.Argument(..., help="Blob identifiers"),
) -> None:
    """Show size and content digest for each blob."""
    cfg = _require_config(ctx)
    metas: list[BlobMeta | None] = _run_command(
        cfg, lambda storage: storage.get_meta(blob_ids)
    ) or []
    if cfg.as_json:
        _emit_output(dict(zip(blob_ids, metas)), cfg.as_json)
        return
    typer.echo(
        _render_rows(
            blob_ids,
            [
                "missing" if meta is None else f"{meta.size}\t{meta.digest}"
                for meta in metas
            ],
        )
    )


@app.command("health")
def health_command(ctx: typer.Context) -> None:
    """Check storage root readiness."""
    cfg = _require_config(ctx)
    status = cfg.storage.health()
    _emit_output(status, cfg.as_json)
    if not status.ready:
        raise typer.Exit(code=IO_ERROR_EXIT_CODE)


if __name__ == "__main__":
    app()
