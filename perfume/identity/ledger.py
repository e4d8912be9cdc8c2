"""Text codec for ledger blobs.

A ledger blob holds one line per stored digest, sorted by digest text:

    "9e3b2749dcca704cad379adf3c6894a59c3363f2d78a4a5155555781e69cc     9\\n"

Each line is the 61-character digest, a single space, the offset
right-justified in a 5-character field, and a newline (68 bytes in total),
so that a line can be located by position alone.
"""

from bisect import bisect_left
from dataclasses import dataclass
from typing import Optional

from ..utils.hex_string import HEX_DIGITS, InvalidEncoding
from .errors import PopulationExhausted
from .types import STORAGE_DIGEST_LENGTH

OFFSET_WIDTH = 5
LINE_SEPARATOR = "\n"
FIELD_SEPARATOR = " "
LINE_WIDTH = STORAGE_DIGEST_LENGTH + len(FIELD_SEPARATOR) + OFFSET_WIDTH
MAX_OFFSET = 10**OFFSET_WIDTH - 1


@dataclass(frozen=True)
class LedgerLine:
    """One persisted ``digest -> offset`` mapping."""

    digest: str
    offset: int

    def render(self) -> str:
        """Render without the trailing newline.

        Raises:
            PopulationExhausted: If the offset does not fit the offset field
        """
        if self.offset < 0 or self.offset > MAX_OFFSET:
            raise PopulationExhausted(
                f"Offset {self.offset} does not fit a {OFFSET_WIDTH}-digit ledger field"
            )
        return f"{self.digest}{FIELD_SEPARATOR}{self.offset:>{OFFSET_WIDTH}}"

    @classmethod
    def parse(cls, line: str) -> "LedgerLine":
        """Parse a single line (without its newline).

        Raises:
            InvalidEncoding: If the line is not a well-formed ledger line
        """
        if len(line) != LINE_WIDTH:
            raise InvalidEncoding(
                f"Ledger line must be {LINE_WIDTH} characters, got {len(line)}: {line!r}"
            )
        digest = line[:STORAGE_DIGEST_LENGTH]
        if not all(char in HEX_DIGITS for char in digest):
            raise InvalidEncoding(f"Ledger digest must be lowercase hex: {digest!r}")
        separator = line[STORAGE_DIGEST_LENGTH]
        offset_field = line[STORAGE_DIGEST_LENGTH + 1 :]
        if separator != FIELD_SEPARATOR:
            raise InvalidEncoding(f"Missing separator after digest: {line!r}")
        offset_text = offset_field.lstrip(" ")
        if not offset_text.isdigit() or not offset_text.isascii():
            raise InvalidEncoding(f"Offset field is not a decimal number: {offset_field!r}")
        return cls(digest=digest, offset=int(offset_text))


class Ledger:
    """Sorted ``digest -> offset`` lines of one storage blob.

    The blob is parsed once; lookups are binary searches over the digest
    column and insertion keeps the lines sorted by digest while the new
    offset follows allocation order (the current line count).
    """

    def __init__(self, lines: Optional[list[LedgerLine]] = None):
        self._lines: list[LedgerLine] = list(lines or [])
        self._digests: list[str] = [line.digest for line in self._lines]

    @classmethod
    def from_blob(cls, blob: Optional[bytes]) -> "Ledger":
        """Parse a stored blob; ``None`` (missing blob) yields an empty ledger.

        Raises:
            InvalidEncoding: If any line is malformed or digests are not strictly sorted
        """
        if not blob:
            return cls()
        try:
            text = bytes(blob).decode("ascii")
        except UnicodeDecodeError as e:
            raise InvalidEncoding("Ledger blob is not ASCII text") from e

        *rows, tail = text.split(LINE_SEPARATOR)
        if tail:
            raise InvalidEncoding(f"Ledger blob must end with a newline: {tail!r}")
        lines = [LedgerLine.parse(raw) for raw in rows]
        for previous, current in zip(lines, lines[1:]):
            if not previous.digest < current.digest:
                raise InvalidEncoding(
                    f"Ledger digests are not strictly sorted: {previous.digest} >= {current.digest}"
                )
        return cls(lines)

    @property
    def lines(self) -> tuple[LedgerLine, ...]:
        return tuple(self._lines)

    def __len__(self) -> int:
        return len(self._lines)

    def find(self, digest: str) -> Optional[int]:
        """Return the stored offset for ``digest``, or None when absent."""
        index = bisect_left(self._digests, digest)
        if index < len(self._digests) and self._digests[index] == digest:
            return self._lines[index].offset
        return None

    def insert(self, digest: str) -> int:
        """Insert a digest that is not yet stored and return its new offset.

        Raises:
            ValueError: If the digest is already present
            PopulationExhausted: If the next offset does not fit the offset field
        """
        index = bisect_left(self._digests, digest)
        if index < len(self._digests) and self._digests[index] == digest:
            raise ValueError(f"Digest {digest} is already stored")

        next_offset = len(self._lines)
        line = LedgerLine(digest=digest, offset=next_offset)
        line.render()  # validate before mutating

        self._lines.insert(index, line)
        self._digests.insert(index, digest)
        return next_offset

    def to_blob(self) -> bytes:
        """Serialize as newline-joined lines with a trailing newline."""
        if not self._lines:
            return b""
        text = LINE_SEPARATOR.join(line.render() for line in self._lines) + LINE_SEPARATOR
        return text.encode("ascii")
