"""Execution helpers for CLI commands."""

from pathlib import Path
from typing import Optional

import click

from .core.editor import EditorSession
from .core.lrc import parse_lrc_timestamp
from .core.serialization import format_lrc_time
from .exceptions import LrcSyncError, ValidationError

SYNC_HELP = """\
  <Enter>        mark the next line at the current time
  i              insert an empty line at the current time
  d N            delete line N
  j N            jump to line N
  e N TEXT       replace the text of line N
  t N MM:SS.xx   set the time of line N ('-' clears it)
  rate X         change playback rate
  p              pause / resume
  r              rewind to the start
  R              discard saved lyrics and start over
  l              list lines
  s              save
  w              download .lrc
  q              quit"""


def render_lyrics(session: EditorSession) -> str:
    """Render the session's lines with their times and cursor marker."""
    rows = []
    for index, line in enumerate(session.lyrics):
        stamp = "--:--.--" if line.start_time is None else format_lrc_time(line.start_time)
        marker = ">" if index == session.current_index else " "
        sung = "*" if session.is_marked(index) else " "
        rows.append(f"{marker}{sung}{index + 1:3d} [{stamp}] {line.text}")
    if not rows:
        return "(no lyrics - paste or import some first)"
    return "\n".join(rows)


def _line_index(session: EditorSession, arg: str) -> int:
    try:
        number = int(arg)
    except ValueError:
        raise ValidationError(f"Not a line number: {arg}")
    if not 1 <= number <= len(session):
        raise ValidationError(f"Line number must be between 1 and {len(session)}")
    return number - 1


def _parse_time_arg(arg: str) -> Optional[float]:
    if arg == "-":
        return None
    seconds = parse_lrc_timestamp(f"[{arg}]")
    if seconds is None:
        raise ValidationError(f"Invalid time: {arg} (use MM:SS or MM:SS.xx)")
    return seconds


def run_editor_command(
    session: EditorSession, command: str, download_dir: Path, logger
) -> bool:
    """Apply one interactive command. Returns False when the user quits."""
    name, _, rest = command.strip().partition(" ")
    rest = rest.strip()

    try:
        if name == "":
            if not session.mark():
                click.echo("Every line is already marked")
        elif name == "i":
            session.insert_line()
        elif name == "d":
            session.remove_line(_line_index(session, rest))
        elif name == "j":
            index = _line_index(session, rest)
            if not session.jump(session.lyrics[index].start_time, index):
                click.echo(f"Line {index + 1} has no time yet")
        elif name == "e":
            number, _, text = rest.partition(" ")
            session.modify_line(_line_index(session, number), text)
        elif name == "t":
            number, _, value = rest.partition(" ")
            session.retime_line(_line_index(session, number), _parse_time_arg(value.strip()))
        elif name == "rate":
            try:
                rate = float(rest)
            except ValueError:
                raise ValidationError(f"Not a playback rate: {rest}")
            session.set_playback_rate(rate)
        elif name == "p":
            playback = session.playback
            if getattr(playback, "paused", False):
                playback.play()
            else:
                playback.pause()
        elif name == "r":
            session.reset_local()
        elif name == "R":
            session.reset_remote()
        elif name == "l":
            click.echo(render_lyrics(session))
        elif name == "s":
            session.save()
            click.echo(f"✅ Saved {len(session)} line(s)")
        elif name == "w":
            path = session.download(download_dir)
            click.echo(f"✅ Downloaded {path}")
        elif name == "q":
            return False
        else:
            click.echo(SYNC_HELP)
    except LrcSyncError as e:
        logger.error(f"❌ {e}")
    return True
