"""Raw lyrics text clean-up ahead of line parsing."""

import re

# A line break followed by one or more repeats of the same break, allowing
# only whitespace in between.
_BLANK_RUN_RE = re.compile(r"(\r?\n)\s*\1+")


def normalize(text: str) -> str:
    """Collapse runs of blank lines into a single line break.

    Pasted lyrics often separate stanzas with several empty lines; each
    would otherwise become an empty lyric line downstream.
    """
    if not text:
        return ""
    previous = None
    # A single pass can leave a fresh run where two collapsed runs meet.
    while previous != text:
        previous = text
        text = _BLANK_RUN_RE.sub(r"\1", text)
    return text
