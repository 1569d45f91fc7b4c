"""
devsetup — CLI entrypoint.

Usage:
    devsetup                 # interactive setup (same as `devsetup setup`)
    devsetup detect --json
    devsetup tools
"""

from __future__ import annotations

import json
import sys
from typing import NoReturn

import click

from devsetup import __version__
from devsetup.core.config.catalog_loader import load_catalog
from devsetup.core.config.settings import Settings, load_settings
from devsetup.core.errors import SetupError
from devsetup.core.observability.logging_config import setup_logging
from devsetup.core.services.detection import host_signal, resolve_profile
from devsetup.core.services.package_manager import PackageManager
from devsetup.core.services.selection import select_container_runtime
from devsetup.core.use_cases.detect import run_detect
from devsetup.core.use_cases.setup import check_prerequisites, run_setup

_LABELS = {
    "info": ("[INFO]", "green"),
    "success": ("[SUCCESS]", "green"),
    "warning": ("[WARNING]", "yellow"),
    "error": ("[ERROR]", "red"),
}


# ── Terminal I/O ────────────────────────────────────────────────


def report(level: str, message: str) -> None:
    """Print one labelled progress line."""
    label, color = _LABELS.get(level, ("[INFO]", "green"))
    click.secho(label, fg=color, nl=False)
    click.echo(f" {message}")


def section(title: str) -> None:
    click.echo()
    click.secho(f"==== {title} ====", fg="blue")
    click.echo()


def ask(prompt: str) -> str:
    """Read one line of input; empty input is returned as ``""``."""
    return click.prompt(
        click.style("[PROMPT]", fg="yellow") + f" {prompt}",
        default="",
        show_default=False,
    )


def fail(error: Exception) -> NoReturn:
    report("error", str(error))
    sys.exit(1)


# ── Root group ──────────────────────────────────────────────────


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="devsetup")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.pass_context
def cli(ctx: click.Context, verbose: bool, quiet: bool, debug: bool) -> None:
    """devsetup — set up a development environment on macOS or Linux."""
    ctx.ensure_object(dict)

    try:
        settings = load_settings()
    except SetupError as e:
        fail(e)

    # ── Logging setup (once, at process start) ──────────────────
    if debug:
        level = "DEBUG"
    elif verbose:
        level = "INFO"
    elif quiet:
        level = "ERROR"
    else:
        level = settings.log_level

    setup_logging(
        level=level,
        log_file=settings.log_file,
        log_file_level=settings.log_file_level,
    )

    ctx.obj["settings"] = settings
    ctx.obj["quiet"] = quiet

    if ctx.invoked_subcommand is None:
        ctx.invoke(setup)


# ── Setup ───────────────────────────────────────────────────────


@cli.command()
@click.pass_context
def setup(ctx: click.Context) -> None:
    """Detect the host and install the development toolchain."""
    settings: Settings = ctx.obj["settings"]

    try:
        check_prerequisites()
        profile = resolve_profile(
            host_signal(),
            os_release_path=settings.os_release,
            marker_command=settings.marker_command,
        )
    except SetupError as e:
        fail(e)

    if profile.is_restricted:
        report("info", "Detected restricted (Cloudtop/gLinux) environment")
    else:
        report("info", f"Detected {profile.label}")

    click.confirm(
        click.style("[PROMPT]", fg="yellow") + f" Proceed with setup on {profile.label}?",
        default=True,
        abort=True,
    )

    section("Starting Development Environment Setup")
    report("info", f"Operating System: {profile.platform.value}")
    if profile.is_restricted:
        report("info", "Environment: Cloudtop/gLinux")

    try:
        selection = select_container_runtime(profile.is_restricted, ask, click.echo)
        catalog = load_catalog()
    except SetupError as e:
        fail(e)

    if selection.warning:
        report("warning", selection.warning)
    report("info", f"Selected container runtime: {selection.runtime.value}")

    profile = profile.with_runtime(selection.runtime)
    manager = PackageManager(
        profile,
        catalog,
        poll_interval=settings.poll_interval,
        report=report,
    )

    result = run_setup(
        profile,
        manager,
        on_section=section,
        warnings=[selection.warning] if selection.warning else None,
    )

    if result.error:
        report("error", result.error)
        sys.exit(1)

    section("Setup Complete")
    report("success", "Development environment setup finished.")
    if result.warnings and not ctx.obj.get("quiet"):
        click.echo()
        click.secho("⚠️  Warnings:", fg="yellow")
        for warning in result.warnings:
            click.echo(f"   • {warning}")


# ── Read-only inspection ────────────────────────────────────────


@cli.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def detect(ctx: click.Context, as_json: bool) -> None:
    """Show the detected environment profile."""
    result = run_detect(ctx.obj["settings"], host_signal())

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(1 if result.error else 0)

    if result.error:
        report("error", result.error)
        sys.exit(1)

    profile = result.profile
    assert profile is not None  # guaranteed after error check above

    click.secho(f"\n🔍 {profile.label}", fg="cyan", bold=True)
    click.echo(f"   Platform:   {profile.platform.value}")
    if profile.arch:
        click.echo(f"   Arch:       {profile.arch}")
    if profile.distro:
        click.echo(f"   Distro:     {profile.distro} {profile.distro_version or ''}".rstrip())
    click.echo(f"   Restricted: {'yes' if profile.is_restricted else 'no'}")
    if profile.is_restricted:
        click.secho("   Podman is recommended on this host.", fg="yellow")
    click.echo()


@cli.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def tools(ctx: click.Context, as_json: bool) -> None:
    """List catalog tools and whether they are installed on this host."""
    try:
        result = run_detect(ctx.obj["settings"], host_signal(), with_tools=True)
    except SetupError as e:
        fail(e)

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(1 if result.error else 0)

    if result.error:
        report("error", result.error)
        sys.exit(1)

    assert result.profile is not None
    click.secho(f"\n📦 Tools for {result.profile.label}:", fg="cyan", bold=True)
    for tool in result.tools:
        if not tool["applicable"]:
            click.secho(f"   ⊘ {tool['label']} ", fg="white", nl=False)
            click.echo("(not used on this host)")
        elif tool["installed"]:
            click.secho(f"   ✓ {tool['label']}", fg="green")
        elif not tool["checked"]:
            click.secho(f"   • {tool['label']} ", fg="cyan", nl=False)
            click.echo("(always run)")
        else:
            click.secho(f"   ✗ {tool['label']} ", fg="red", nl=False)
            click.echo("(missing)")
    click.echo()


if __name__ == "__main__":
    cli()
