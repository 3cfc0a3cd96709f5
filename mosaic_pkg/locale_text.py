"""
Language selection for multi-language values and inline-tagged text.

Inline regions look like::

    <? START-LANG [en] ?>English only<? END-LANG ?>

A region is kept (markers stripped) when its code matches the requested
language and dropped entirely otherwise. Regions never nest: a start marker
always pairs with the nearest end marker that follows it.
"""

from typing import Sequence

from .models import ANY_LANGUAGE, MultiLanguageText

START_MARKER_OPEN = '<? START-LANG ['
START_MARKER_CLOSE = '] ?>'
END_MARKER = '<? END-LANG ?>'
CODE_LENGTH = 2


def resolve_list(texts: Sequence[MultiLanguageText], lang_id: str) -> str:
    """Pick the text for ``lang_id``; a leading ``_any`` entry wins for every language."""
    if not texts:
        return ''
    if texts[0].lang_id == ANY_LANGUAGE:
        return texts[0].text
    for entry in texts:
        if entry.lang_id == lang_id:
            return entry.text
    return ''


def _read_code(source: str, position: int):
    """
    Parse a language code starting right after a start marker opening.

    Returns the code and the index just past the start marker, or
    ``(None, position)`` if the marker is malformed.
    """
    code = source[position:position + CODE_LENGTH]
    close = position + CODE_LENGTH
    if (len(code) == CODE_LENGTH
            and all('a' <= char <= 'z' for char in code)
            and source.startswith(START_MARKER_CLOSE, close)):
        return code, close + len(START_MARKER_CLOSE)
    return None, position


def resolve_inline(source: str, lang_id: str) -> str:
    """Collapse every inline region to its body for ``lang_id`` and drop the rest."""
    output = []
    cursor = 0
    while True:
        start = source.find(START_MARKER_OPEN, cursor)
        if start == -1:
            break
        code, body_start = _read_code(source, start + len(START_MARKER_OPEN))
        if code is None:
            # Malformed marker: keep it verbatim and look further on.
            resume = start + len(START_MARKER_OPEN)
            output.append(source[cursor:resume])
            cursor = resume
            continue
        end = source.find(END_MARKER, body_start)
        if end == -1:
            # Unterminated region: leave the rest untouched.
            break
        output.append(source[cursor:start])
        if code == lang_id:
            output.append(source[body_start:end])
        cursor = end + len(END_MARKER)
    output.append(source[cursor:])
    return ''.join(output)
