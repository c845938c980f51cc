"""Unicode emoji table and first-code-point matcher.

The default table is built from the sequences known to the ``emoji`` package. Since
version 2.14.1 that package keeps its data in separate JSON files, so a frozen build
(e.g. PyInstaller) must bundle them:

    from PyInstaller.utils.hooks import collect_data_files
    emoji_datas = collect_data_files('emoji.unicode_codes', includes=['*.json'])

A table can also be loaded from a static resource file holding one sequence per line as
dash-separated hex code points, the naming used by the Twemoji SVG assets.
"""

from __future__ import annotations

from collections import defaultdict
from functools import cache
from pathlib import Path
from typing import TYPE_CHECKING, Final

import emoji
from packaging.version import Version

from discord_message_parser.models.message_models import PlainText, Span, UnicodeEmoji
from discord_message_parser.models.re_models import EMOJI_TABLE_LINE_PATTERN, EMOJI_TABLE_VERSION_PATTERN
from discord_message_parser.utils.logger_utils import LoggerUtils

if TYPE_CHECKING:
    import logging
    from collections.abc import Iterable, Iterator, Mapping
    from re import Match

    from discord_message_parser.models.message_models import MessagePart


__all__: list[str] = [
    "EmojiMatcher",
    "EmojiTable",
    "EmojiTableFormatError",
    "get_default_matcher",
    "get_default_table",
]

logger: logging.Logger = LoggerUtils.get_logger(__name__)

MINIMUM_EMOJI_VERSION: Final[str] = "2.14.1"

if Version(emoji.__version__) < Version(MINIMUM_EMOJI_VERSION):
    logger.warning(
        "The version of the emoji module currently in use is %s. Version %s or later is required.",
        emoji.__version__,
        MINIMUM_EMOJI_VERSION,
    )


class EmojiTableFormatError(ValueError):
    """An emoji table resource contains a line that is not a code point sequence."""


class EmojiTable:
    """An immutable set of known emoji sequences.

    Sequences are deduplicated and, unless ``sort`` is False, ordered by descending code
    points. The order is the order in which the matcher tries candidates that share a first
    code point, so with the default ordering a sequence is tried before any strict prefix
    of it.

    Args:
        sequences (Iterable[str]): Emoji sequences. Empty strings are ignored.
        version (str): Free-form version of the data the table was built from.
        sort (bool): If False, keep the given order (first occurrence wins when deduplicating).
    """

    def __init__(self, sequences: Iterable[str], *, version: str = "", sort: bool = True) -> None:
        unique: dict[str, None] = dict.fromkeys(seq for seq in sequences if seq)
        ordered: list[str] = sorted(unique, reverse=True) if sort else list(unique)
        self._sequences: tuple[str, ...] = tuple(ordered)
        self._members: frozenset[str] = frozenset(ordered)
        self.version: str = version

        overlaps: int = len(self.prefix_overlaps())
        if overlaps:
            logger.debug(
                "Emoji table %r has %d sequences that are strict prefixes of others; "
                "matches among them depend on table order.",
                version,
                overlaps,
            )
        logger.debug("Emoji table %r built with %d sequences", version, len(self._sequences))

    def __len__(self) -> int:
        return len(self._sequences)

    def __iter__(self) -> Iterator[str]:
        return iter(self._sequences)

    def __contains__(self, item: object) -> bool:
        return item in self._members

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(version={self.version!r}, size={len(self)})"

    @property
    def sequences(self) -> tuple[str, ...]:
        return self._sequences

    def prefix_overlaps(self) -> list[tuple[str, str]]:
        """List (shorter, longer) pairs where the shorter sequence is a strict prefix of the longer.

        Such pairs make matching depend on table order instead of on match length.

        Returns:
            list[tuple[str, str]]: The overlapping pairs, shorter sequence first.
        """
        overlaps: list[tuple[str, str]] = []
        for seq in self._sequences:
            for end in range(1, len(seq)):
                if seq[:end] in self._members:
                    overlaps.append((seq[:end], seq))
        return overlaps

    @classmethod
    def from_emoji_package(cls) -> EmojiTable:
        """Build the table from every sequence in ``emoji.EMOJI_DATA``."""
        return cls(emoji.EMOJI_DATA.keys(), version=f"emoji-{emoji.__version__}")

    @classmethod
    def from_file(cls, path: str | Path) -> EmojiTable:
        """Load a table resource file.

        Each line holds one sequence as dash-separated lowercase hex code points, optionally
        followed by ``.svg``. Blank lines and ``#`` comments are skipped; a first line of the
        form ``# version: <text>`` sets the table version.

        Args:
            path (str | Path): The resource file.

        Returns:
            EmojiTable: The loaded table.

        Raises:
            EmojiTableFormatError: If a line is not a valid code point sequence.
        """
        path = Path(path)
        version: str = ""
        sequences: list[str] = []
        with path.open(encoding="utf-8") as file:
            for lineno, raw_line in enumerate(file, start=1):
                line: str = raw_line.strip()
                if not line:
                    continue
                if line.startswith("#"):
                    header: Match[str] | None = EMOJI_TABLE_VERSION_PATTERN.fullmatch(line)
                    if header and lineno == 1:
                        version = header.group("version")
                    continue
                sequences.append(cls._decode_line(line, path, lineno))

        logger.debug("Loaded %d emoji sequences from %s", len(sequences), path)
        return cls(sequences, version=version or path.stem)

    @staticmethod
    def _decode_line(line: str, path: Path, lineno: int) -> str:
        match: Match[str] | None = EMOJI_TABLE_LINE_PATTERN.fullmatch(line)
        msg: str
        if match is None:
            msg = f"{path}:{lineno}: not an emoji code point sequence: {line!r}"
            raise EmojiTableFormatError(msg)
        try:
            return "".join(chr(int(hex_cp, 16)) for hex_cp in match.group("codepoints").split("-"))
        except ValueError:
            msg = f"{path}:{lineno}: code point out of range: {line!r}"
            raise EmojiTableFormatError(msg) from None

    def dump(self, path: str | Path) -> None:
        """Write the table in the resource file format read by :meth:`from_file`.

        Args:
            path (str | Path): Destination file. Overwritten if it exists.
        """
        lines: list[str] = [f"# version: {self.version}"] if self.version else []
        lines.extend("-".join(f"{ord(char):x}" for char in seq) for seq in self._sequences)
        Path(path).write_text("\n".join(lines) + "\n", encoding="utf-8")
        logger.info("Wrote %d emoji sequences to %s", len(self._sequences), path)


class EmojiMatcher:
    """Finds known emoji sequences in literal text.

    Candidates are grouped by their first code point. At each position the group for that
    code point is tried in table order and the first sequence the text starts with wins.

    Args:
        table (EmojiTable): The known sequences.
    """

    def __init__(self, table: EmojiTable) -> None:
        groups: defaultdict[str, list[str]] = defaultdict(list)
        for seq in table:
            groups[seq[0]].append(seq)
        self.table: EmojiTable = table
        self._groups: dict[str, tuple[str, ...]] = {first: tuple(group) for first, group in groups.items()}

    @property
    def groups(self) -> Mapping[str, tuple[str, ...]]:
        return self._groups

    def match_at(self, text: str, index: int) -> str | None:
        """Return the first known sequence starting at ``text[index]``, or None."""
        for candidate in self._groups.get(text[index], ()):
            if text.startswith(candidate, index):
                return candidate
        return None

    def split(self, text: str, offset: int = 0) -> list[MessagePart]:
        """Split a literal run into plain text and Unicode emoji parts.

        Code points consumed by a match are never examined again. No empty plain text part
        is produced, so adjacent emoji come out as consecutive emoji parts.

        Args:
            text (str): The literal run. It must not contain tags.
            offset (int): Position of the run in the whole message, used for the parts' spans.

        Returns:
            list[MessagePart]: The parts in source order.
        """
        parts: list[MessagePart] = []
        start: int = 0  # start of the pending plain text
        index: int = 0
        while index < len(text):
            found: str | None = self.match_at(text, index)
            if found is None:
                index += 1
                continue
            if index > start:
                parts.append(PlainText(text[start:index], Span(offset + start, offset + index)))
            end: int = index + len(found)
            parts.append(UnicodeEmoji(found, Span(offset + index, offset + end)))
            start = index = end
        if len(text) > start:
            parts.append(PlainText(text[start:], Span(offset + start, offset + len(text))))
        return parts


@cache
def get_default_table() -> EmojiTable:
    """Return the process-wide table built from the ``emoji`` package."""
    return EmojiTable.from_emoji_package()


@cache
def get_default_matcher() -> EmojiMatcher:
    """Return the process-wide matcher over :func:`get_default_table`."""
    return EmojiMatcher(get_default_table())
