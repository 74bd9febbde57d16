"""Command-line interface using Click."""

import json
import sys
from pathlib import Path

import click

from . import __version__
from .config import DEFAULT_ENCODING, DEFAULT_PLAYBACK_RATE, PLAYBACK_RATES, get_lyrics_dir
from .cli_commands import SYNC_HELP, render_lyrics, run_editor_command
from .core.editor import EditorSession
from .core.lrc import init_lyrics
from .core.models import TrackInfo
from .core.normalize import normalize as normalize_text
from .core.playback import ClockPlayback
from .core.serialization import lines_to_json, serialize_lyrics
from .core.store import LrcDirectoryStore
from .exceptions import LrcSyncError, LyricsError
from .utils.logging import setup_logging
from .utils.validation import validate_complete_timing, validate_output_path


def _read_text(path: str) -> str:
    try:
        return Path(path).read_text(encoding=DEFAULT_ENCODING)
    except (OSError, UnicodeDecodeError) as e:
        raise LyricsError(f"Cannot read lyrics file {path}: {e}")


def _write_or_echo(text: str, output) -> None:
    if output:
        output_path = validate_output_path(output)
        output_path.write_text(text, encoding=DEFAULT_ENCODING)
        click.echo(f"✅ Wrote {output_path}")
    else:
        click.echo(text, nl=False)


@click.group()
@click.version_option(version=__version__)
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose logging')
@click.option('--log-file', type=click.Path(), help='Log to file')
@click.pass_context
def cli(ctx, verbose, log_file):
    """lrcsync - Time plain lyrics against playback and export LRC."""
    ctx.ensure_object(dict)
    logger = setup_logging(
        level="DEBUG" if verbose else None,
        log_file=Path(log_file) if log_file else None,
        verbose=verbose
    )
    ctx.obj['logger'] = logger
    ctx.obj['verbose'] = verbose


@cli.command()
@click.argument('input_file', type=click.Path(exists=True, dir_okay=False))
@click.option('-o', '--output', help='Output file path')
@click.pass_context
def normalize(ctx, input_file, output):
    """Collapse stacked blank lines in a lyrics file."""
    logger = ctx.obj['logger']
    try:
        _write_or_echo(normalize_text(_read_text(input_file)), output)
    except LrcSyncError as e:
        logger.error(f"❌ {e}")
        sys.exit(1)


@cli.command()
@click.argument('input_file', type=click.Path(exists=True, dir_okay=False))
@click.option('-o', '--output', help='Output file path (.lrc, .txt or .json)')
@click.option('--json', 'as_json', is_flag=True, help='Emit a JSON line list instead of LRC')
@click.pass_context
def convert(ctx, input_file, output, as_json):
    """Parse lyrics and write them back as LRC."""
    logger = ctx.obj['logger']
    try:
        lyrics = init_lyrics(_read_text(input_file))
        if not lyrics:
            raise LyricsError(f"No usable lyrics in {input_file}")
        untimed = sum(1 for line in lyrics if not line.is_timed)
        if untimed:
            logger.warning(f"{untimed} untimed line(s) reuse the previous timestamp")
        if as_json:
            text = json.dumps(lines_to_json(lyrics), indent=2, ensure_ascii=False) + "\n"
        else:
            text = serialize_lyrics(lyrics)
        _write_or_echo(text, output)
    except LrcSyncError as e:
        logger.error(f"❌ {e}")
        sys.exit(1)


@cli.command()
@click.argument('input_file', type=click.Path(exists=True, dir_okay=False))
@click.pass_context
def check(ctx, input_file):
    """Check that every line of a lyrics file is timed."""
    logger = ctx.obj['logger']
    try:
        lyrics = init_lyrics(_read_text(input_file))
        click.echo(f"Lines: {len(lyrics)}")
        click.echo(f"Untimed: {sum(1 for line in lyrics if not line.is_timed)}")
        if not lyrics:
            raise LyricsError(f"No usable lyrics in {input_file}")
        validate_complete_timing(lyrics)
        click.echo("✅ Ready to save")
    except LrcSyncError as e:
        logger.error(f"❌ {e}")
        sys.exit(1)


@cli.command()
@click.argument('input_file', type=click.Path(exists=True, dir_okay=False))
@click.option('--name', required=True, help='Track name')
@click.option('--artist', required=True, help='Track artists')
@click.option('--rate', type=click.Choice([f"{r:g}" for r in PLAYBACK_RATES]),
              default=f"{DEFAULT_PLAYBACK_RATE:g}", help='Playback rate')
@click.option('--duration', type=float, default=None,
              help='Track length in seconds (playback loops at the end)')
@click.option('--lyrics-dir', type=click.Path(file_okay=False),
              help='Directory of saved lyrics')
@click.option('-o', '--output-dir', type=click.Path(file_okay=False), default='.',
              help='Directory for downloaded .lrc files')
@click.pass_context
def sync(ctx, input_file, name, artist, rate, duration, lyrics_dir, output_dir):
    """Tap along to time each line of a lyrics file."""
    logger = ctx.obj['logger']
    try:
        store = LrcDirectoryStore(Path(lyrics_dir) if lyrics_dir else get_lyrics_dir())
        track = TrackInfo(name=name, artists=artist)
        playback = ClockPlayback(duration=duration)
        session = EditorSession.from_store(playback, track, _read_text(input_file), store)

        with session:
            session.set_playback_rate(float(rate))
            click.echo(f"Editing: {track.display_name}")
            click.echo(SYNC_HELP)
            click.echo(render_lyrics(session))
            while True:
                command = click.prompt(
                    f"[{playback.current_time:6.2f}s]", default="",
                    show_default=False, prompt_suffix=" > ",
                )
                if not run_editor_command(session, command, Path(output_dir), logger):
                    break
    except LrcSyncError as e:
        logger.error(f"❌ {e}")
        sys.exit(1)


@cli.command()
@click.option('--lyrics-dir', type=click.Path(file_okay=False),
              help='Directory of saved lyrics')
def saved(lyrics_dir):
    """List tracks with saved lyrics."""
    store = LrcDirectoryStore(Path(lyrics_dir) if lyrics_dir else get_lyrics_dir())
    tracks = store.list_tracks()
    if not tracks:
        click.echo("No saved lyrics")
        return
    for name in tracks:
        click.echo(name)


if __name__ == '__main__':
    cli()
