from __future__ import annotations
import codecs

from wordclock.models.state import VocabularyEntry

MIN_LINES = 10
FIELD_COUNT = 4
_TRIM = " \t\r\n"


class WordsError(Exception):
    pass


class ResourceUnavailable(WordsError):
    pass


class ParseRejected(WordsError):
    pass


def decode_buffer(raw: bytes | str) -> str:
    if isinstance(raw, str):
        return raw.lstrip("\ufeff")
    data = bytes(raw)
    if data.startswith((codecs.BOM_UTF16_LE, codecs.BOM_UTF16_BE)):
        return data.decode("utf-16", errors="replace")
    return data.decode("utf-8-sig", errors="replace")


def _split_lines(text: str) -> list[str]:
    lines = text.split("\n")
    # Rest nach abschließendem Zeilenumbruch ist keine Zeile
    if lines and lines[-1] == "":
        lines.pop()
    return lines


def parse_line(line: str) -> VocabularyEntry | None:
    fields = [f.strip(_TRIM) for f in line.split("\t")[:FIELD_COUNT]]
    if not fields or not fields[0]:
        return None
    fields += [""] * (FIELD_COUNT - len(fields))
    name, uk, us, trans = fields
    return VocabularyEntry(name=name, uk=uk, us=us, trans=trans)


def parse_tsv(raw: bytes | str | None) -> list[VocabularyEntry]:
    """Parse the tab-separated vocabulary resource.

    One record per line: headword, UK phonetic, US phonetic, translation.
    Anything after the fourth tab-separated field is ignored, missing fields
    become empty strings and lines without a headword are skipped.

    Raises ResourceUnavailable when there is no buffer at all and
    ParseRejected when the buffer has fewer than MIN_LINES lines or no
    usable entry. A rejected buffer yields nothing, never a partial list.
    """
    if raw is None:
        raise ResourceUnavailable("no vocabulary buffer")
    lines = _split_lines(decode_buffer(raw))
    if len(lines) < MIN_LINES:
        raise ParseRejected(f"only {len(lines)} lines, need at least {MIN_LINES}")

    out: list[VocabularyEntry] = []
    for line in lines:
        entry = parse_line(line)
        if entry is not None:
            out.append(entry)
    if not out:
        raise ParseRejected("no entries with a headword")
    return out
