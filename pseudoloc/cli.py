from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Optional, cast

import typer
import yaml
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from pseudoloc.core.check.check_catalog import check_catalog
from pseudoloc.core.errors import (
    CatalogLoadError,
    CatalogValidationError,
    PseudoLocError,
    SettingsError,
)
from pseudoloc.core.io.catalog_io import (
    CatalogLayout,
    load_catalog,
    output_path_for,
    save_catalog,
)
from pseudoloc.core.model import LocaleProfile
from pseudoloc.core.profiles.profile_config import ProfileConfigError, load_and_merge
from pseudoloc.core.profiles.registry import ProfileRegistry, describe_profile
from pseudoloc.core.settings import Settings, load_settings
from pseudoloc.core.transform.transform_catalog import new_seed, transform_catalog_concurrent

app = typer.Typer(add_completion=False, no_args_is_help=True)
console = Console()


class _Abort(Exception):
    """Carries the errors and exit code of a failed step back to the command."""

    def __init__(self, errors: list[PseudoLocError], exit_code: int) -> None:
        super().__init__(exit_code)
        self.errors = errors
        self.exit_code = exit_code


@app.callback()
def _callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Pseudo-localization CLI."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        )


@app.command("render")
def render(
    path: str = typer.Argument(..., help="Source catalog (.json/.yaml/.yml)"),
    locale: Optional[str] = typer.Option(
        None, "--locale", "-l", help="Locale to render (default: $PSEUDOLOC_LOCALE or German)"
    ),
    out: Optional[str] = typer.Option(
        None, "--out", help="Output path (default: {Locale}Pseudo.json next to the source)"
    ),
    seed: Optional[int] = typer.Option(
        None, "--seed", help="Seed for reproducible output (default: $PSEUDOLOC_SEED or time)"
    ),
    workers: Optional[int] = typer.Option(
        None, "--workers", help="Worker threads (default: $PSEUDOLOC_WORKERS or 1)"
    ),
    profile_file: Optional[str] = typer.Option(
        None, "--profile-file", help="Optional YAML file to add/override locale profiles"
    ),
    layout: str = typer.Option("flat", "--layout", help="Output layout: flat|items"),
    require_non_empty: bool = typer.Option(
        False, "--require-non-empty", help="Fail when the source catalog has no entries"
    ),
    format: str = typer.Option("text", "--format", help="Output format: text|json"),
) -> None:
    """Render a pseudo-localized catalog for one locale."""
    if format not in ("text", "json"):
        _print_errors([_unknown_format("E_RENDER_UNKNOWN_FORMAT", format)])
        raise typer.Exit(code=2)

    try:
        settings = _settings()
        locale_id = locale or settings.locale
        run_seed = seed if seed is not None else settings.seed
        run_workers = workers if workers is not None else settings.workers

        if layout not in ("flat", "items"):
            raise _Abort(
                [
                    CatalogValidationError(
                        code="E_RENDER_UNKNOWN_LAYOUT",
                        message=f"unknown layout: {layout} (choose one of: flat, items)",
                        path="layout",
                    )
                ],
                2,
            )
        if run_workers < 1:
            raise _Abort(
                [
                    CatalogValidationError(
                        code="E_RENDER_INVALID_WORKERS",
                        message=f"--workers must be >= 1, got {run_workers}",
                        path="workers",
                    )
                ],
                2,
            )

        source = _load(path)
        registry = _registry(profile_file or settings.profile_file)
        profile = _profile(registry, locale_id)

        if run_seed is None:
            run_seed = new_seed()
        try:
            run = transform_catalog_concurrent(
                source,
                profile,
                seed=run_seed,
                workers=run_workers,
                require_non_empty=require_non_empty,
            )
        except CatalogValidationError as e:
            raise _Abort([e], 2) from e

        out_path = Path(out) if out else output_path_for(path, profile.locale_id)
        try:
            save_catalog(run.catalog, out_path, layout=cast(CatalogLayout, layout))
        except OSError as e:
            raise _Abort(
                [CatalogLoadError(code="E_FILE_WRITE", message=str(e), file=str(out_path))], 1
            ) from e
    except _Abort as a:
        if format == "json":
            _emit_json("render", False, a.errors, a.exit_code)
        _print_errors(a.errors)
        raise typer.Exit(code=a.exit_code)

    if format == "json":
        _emit_json(
            "render",
            True,
            [],
            0,
            locale=profile.locale_id,
            seed=run_seed,
            entry_count=run.completed,
            out=str(out_path),
        )
    typer.echo(
        f"OK: wrote {out_path} (locale={profile.locale_id}, entries={run.completed}, seed={run_seed})"
    )


@app.command("locales")
def locales(
    profile_file: Optional[str] = typer.Option(
        None, "--profile-file", help="Optional YAML file to add/override locale profiles"
    ),
    format: str = typer.Option("text", "--format", help="Output format: text|json"),
) -> None:
    """List registered locale profiles."""
    if format not in ("text", "json"):
        _print_errors([_unknown_format("E_LOCALES_UNKNOWN_FORMAT", format)])
        raise typer.Exit(code=2)

    try:
        settings = _settings()
        registry = _registry(profile_file or settings.profile_file)
    except _Abort as a:
        if format == "json":
            _emit_json("locales", False, a.errors, a.exit_code)
        _print_errors(a.errors)
        raise typer.Exit(code=a.exit_code)

    described = [describe_profile(p) for p in registry]
    if format == "json":
        _emit_json("locales", True, [], 0, locales=described)

    table = Table(title="Locales")
    table.add_column("Locale")
    table.add_column("Keys", justify="right")
    table.add_column("Multi-candidate")
    table.add_column("Filler")
    for d in described:
        table.add_row(
            d["locale"],
            str(d["substitution_keys"]),
            " ".join(d["multi_candidate_keys"]) or "-",
            " ".join(d["filler"]),
        )
    console.print(table)


@app.command("check")
def check(
    source_path: str = typer.Argument(..., help="Source catalog (.json/.yaml/.yml)"),
    pseudo_path: str = typer.Argument(..., help="Pseudo catalog to verify"),
    locale: Optional[str] = typer.Option(
        None, "--locale", "-l", help="Locale the pseudo catalog was rendered for"
    ),
    profile_file: Optional[str] = typer.Option(
        None, "--profile-file", help="Optional YAML file to add/override locale profiles"
    ),
    format: str = typer.Option("text", "--format", help="Output format: text|json"),
) -> None:
    """Check a pseudo catalog against its source (keys, lengths, characters)."""
    if format not in ("text", "json"):
        _print_errors([_unknown_format("E_CHECK_UNKNOWN_FORMAT", format)])
        raise typer.Exit(code=2)

    try:
        settings = _settings()
        source = _load(source_path)
        pseudo = _load(pseudo_path)
        registry = _registry(profile_file or settings.profile_file)
        profile = _profile(registry, locale or settings.locale)
    except _Abort as a:
        if format == "json":
            _emit_json("check", False, a.errors, a.exit_code)
        _print_errors(a.errors)
        raise typer.Exit(code=a.exit_code)

    errors: list[PseudoLocError] = list(check_catalog(source, pseudo, profile, file=pseudo_path))

    if format == "json":
        _emit_json(
            "check",
            not errors,
            errors,
            2 if errors else 0,
            locale=profile.locale_id,
            entry_count=len(source),
        )
    if errors:
        _print_errors(errors)
        raise typer.Exit(code=2)
    typer.echo(f"OK: {len(source)} entries match {profile.locale_id}")


def _settings() -> Settings:
    try:
        return load_settings()
    except SettingsError as e:
        raise _Abort([e], 2) from e


def _load(path: str) -> dict[str, str]:
    try:
        return load_catalog(path)
    except CatalogLoadError as e:
        raise _Abort([e], 1) from e


def _registry(profile_file: Optional[str]) -> ProfileRegistry:
    try:
        return load_and_merge(profile_file)
    except FileNotFoundError as e:
        raise _Abort(
            [
                CatalogLoadError(
                    code="E_PROFILE_FILE_NOT_FOUND",
                    message=f"profile file not found: {profile_file}",
                    file=None,
                    path="profile_file",
                )
            ],
            1,
        ) from e
    except (ProfileConfigError, yaml.YAMLError) as e:
        raise _Abort(
            [
                CatalogValidationError(
                    code="E_PROFILE_FILE_INVALID",
                    message=str(e),
                    file=profile_file,
                    path="profile_file",
                )
            ],
            2,
        ) from e
    except PseudoLocError as e:
        raise _Abort([e], 2) from e


def _profile(registry: ProfileRegistry, locale_id: str) -> LocaleProfile:
    try:
        return registry.profile_for(locale_id)
    except PseudoLocError as e:
        raise _Abort([e], 2) from e


def _unknown_format(code: str, format: str) -> PseudoLocError:
    return CatalogValidationError(
        code=code,
        message=f"unknown format: {format} (choose one of: text, json)",
        file=None,
        path="format",
    )


def _to_item(e: PseudoLocError) -> dict[str, Any]:
    source = "check" if e.code.startswith("L_") else "load" if isinstance(e, CatalogLoadError) else "validate"
    return {
        "code": e.code,
        "message": e.message,
        "file": e.file,
        "path": e.path,
        "severity": "error",
        "source": source,
    }


def _emit_json(
    command: str, ok: bool, errors: list[PseudoLocError], exit_code: int, **extra: Any
) -> None:
    payload: dict[str, Any] = {
        "tool": "pseudoloc",
        "command": command,
        "ok": ok,
        "error_count": len(errors),
        "errors": [_to_item(e) for e in _sorted(errors)],
    }
    payload.update(extra)
    typer.echo(json.dumps(payload, indent=2, sort_keys=True, ensure_ascii=False))
    raise typer.Exit(code=exit_code)


def _sorted(errors: list[PseudoLocError]) -> list[PseudoLocError]:
    return sorted(errors, key=lambda e: (e.file or "", e.path or "", e.code))


def _print_errors(errors: list[PseudoLocError]) -> None:
    for e in _sorted(errors):
        typer.echo(str(e), err=True)


def main() -> None:
    app(prog_name="pseudoloc")


cli = typer.main.get_command(app)

if __name__ == "__main__":
    main()
