"""
Command-line interface for Presentation Buddy.
"""

from __future__ import annotations
import asyncio
import logging
import random
import sys
import threading
from pathlib import Path
from typing import Optional, Tuple

import click

from presenter import __version__
from presenter.config import PlaybackConfig
from presenter.host.memory import MemoryHost
from presenter.loader import InstructionFileError, init_instructions, load_instructions
from presenter.playback import InstructionPlayer, split_text_into_chunks


def _report_error(message: str) -> None:
    click.echo(f"❌ {message}", err=True)


def _describe(instruction) -> str:
    """One-line summary of an instruction."""
    data = instruction.model_dump(by_alias=True, exclude={"skip", "type", "qualified_path"}, exclude_none=True)
    details = ", ".join(f"{k}={v!r}" for k, v in data.items())
    return f"{instruction.type}({details})"


def _load_or_exit(workspace: Path):
    try:
        return load_instructions(workspace, on_error=_report_error)
    except InstructionFileError as e:
        _report_error(str(e))
        raise SystemExit(1)


def _listen_for_resume(player: InstructionPlayer, stream) -> None:
    """Resume manual waits on keypress (or on each line when stdin is not a TTY)."""
    if stream.isatty():
        while True:
            click.getchar()
            player.resume()
    else:
        for _ in stream:
            player.resume()
        click.echo("\n⏩ Input closed, manual waits will no longer pause", err=True)
        player.gate.close()


@click.group()
@click.version_option(version=__version__)
def main():
    """Presentation Buddy - replay scripted live coding sessions."""
    pass


@main.command()
@click.option(
    "--workspace", "-w",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=Path("."),
    help="Workspace folder to initialize"
)
def init(workspace: Path):
    """Create a starter .presentation-buddy/instructions.json."""
    target = init_instructions(workspace.resolve(), confirm=click.confirm)
    if target is None:
        click.echo("Kept the existing instructions file.")
    else:
        click.echo(f"✅ Instructions written to: {target}")


@main.command()
@click.option(
    "--workspace", "-w",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=Path("."),
    help="Workspace folder to play in"
)
@click.option(
    "--config", "-c",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Path to a YAML settings file"
)
@click.option(
    "--seed",
    type=int,
    default=None,
    help="Seed for typing jitter (repeatable runs)"
)
@click.option(
    "--dry-run",
    is_flag=True,
    help="List instructions without playing them"
)
@click.option(
    "--no-render",
    is_flag=True,
    help="Do not echo typed text to the terminal"
)
@click.option(
    "--save",
    is_flag=True,
    help="Write edited documents to disk when playback ends"
)
@click.option(
    "--verbose", "-v",
    is_flag=True,
    help="Enable verbose output"
)
def play(
    workspace: Path,
    config: Optional[Path],
    seed: Optional[int],
    dry_run: bool,
    no_render: bool,
    save: bool,
    verbose: bool
):
    """
    Play the workspace's instructions.

    Typing is echoed to the terminal. Press any key (or Enter when input is
    piped) to continue past a manual wait.
    """
    if verbose:
        logging.basicConfig(level=logging.DEBUG)

    workspace = workspace.resolve()
    playback_config = PlaybackConfig.from_file(config) if config else PlaybackConfig.discover(workspace)

    instructions = _load_or_exit(workspace)
    click.echo(f"🎬 Loaded {len(instructions)} instructions")

    if dry_run:
        click.echo("\n📋 Dry run - instructions to be played:")
        for i, instruction in enumerate(instructions):
            click.echo(f"   {i+1}. {_describe(instruction)}")
        return

    host = MemoryHost(
        workspace_root=workspace,
        on_insert=None if no_render else (lambda text: click.echo(text, nl=False)),
        on_open=None if no_render else (lambda path: click.echo(f"\n--- {path} ---")),
    )
    player = InstructionPlayer(
        host,
        config=playback_config,
        rng=random.Random(seed) if seed is not None else None
    )
    player.on_error = _report_error

    listener = threading.Thread(target=_listen_for_resume, args=(player, sys.stdin), daemon=True)
    listener.start()

    click.echo("▶️  Playing...")
    asyncio.run(player.play(instructions))

    if save:
        saved = asyncio.run(host.execute_command("saveAll"))
        click.echo(f"\n💾 Saved {saved} document(s)")

    click.echo("\n✅ Playback complete!")


@main.command()
@click.option(
    "--workspace", "-w",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=Path("."),
    help="Workspace folder to check"
)
def validate(workspace: Path):
    """Validate the workspace's instructions file."""
    click.echo(f"🔍 Validating instructions for: {workspace}")

    instructions = _load_or_exit(workspace.resolve())
    if not instructions:
        raise SystemExit(1)

    click.echo(f"✅ {len(instructions)} instructions loaded")
    for i, instruction in enumerate(instructions):
        click.echo(f"   {i+1}. {_describe(instruction)}")


@main.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--instead", "-i", multiple=True, help="Marker that pauses instead of being typed")
@click.option("--after", "-a", multiple=True, help="Marker that pauses after being typed")
@click.option("--skip", "-s", multiple=True, help="Skip lines containing this text")
@click.option("--no-newline-wait", is_flag=True, help="Do not pause after every newline")
def chunks(
    file: Path,
    instead: Tuple[str, ...],
    after: Tuple[str, ...],
    skip: Tuple[str, ...],
    no_newline_wait: bool
):
    """Show how a file would be split into typed chunks."""
    text = file.read_text(encoding="utf-8").replace("\r\n", "\n")
    markers = list(after) if no_newline_wait else list(after) + ["\n"]

    result = split_text_into_chunks(text, instead, markers, skip)
    click.echo(f"✂️  {len(result)} chunks")
    for i, chunk in enumerate(result):
        click.echo(f"   [{i+1}] {chunk!r}")


if __name__ == "__main__":
    main()
