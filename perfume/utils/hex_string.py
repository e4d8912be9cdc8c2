"""Explicitly sized strings of lowercase hexadecimal characters."""

from functools import lru_cache
from typing import ClassVar, Union

HEX_DIGITS = "0123456789abcdef"


class InvalidEncoding(ValueError):
    """Raised when a value is not exactly N ASCII hex digits."""


class HexString:
    """N hex characters from '[0-9a-f]'.

    Subclasses pin the width through the ``WIDTH`` class attribute. Input may
    be raw bytes (interpreted as ASCII) or text; uppercase letters are
    lowercased. Instances are immutable and compare by value.
    """

    WIDTH: ClassVar[int] = 0

    __slots__ = ("_value",)

    def __init__(self, raw: Union[bytes, bytearray, memoryview, str]):
        if isinstance(raw, str):
            try:
                raw = raw.encode("ascii")
            except UnicodeEncodeError as e:
                raise InvalidEncoding(f"{raw!r} is not ASCII") from e
        raw = bytes(raw)

        if len(raw) != self.WIDTH:
            raise InvalidEncoding(
                f"Expected {self.WIDTH} hex characters, got {len(raw)}: {raw!r}"
            )
        text = raw.decode("ascii", errors="replace").lower()
        if any(ch not in HEX_DIGITS for ch in text):
            raise InvalidEncoding(f"{raw!r} contains non-hex characters")

        object.__setattr__(self, "_value", text)

    @classmethod
    def zero(cls) -> "HexString":
        """Return the placeholder value of WIDTH '0' characters."""
        return cls("0" * cls.WIDTH)

    @property
    def value(self) -> str:
        """View as text."""
        return self._value

    def to_int(self) -> int:
        """Interpret the digits as an unsigned big-endian number."""
        return int(self._value, 16) if self._value else 0

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __reduce__(self):
        # immutable: copy, deepcopy and pickle rebuild through the constructor
        cls = type(self)
        if cls is hex_string_type(self.WIDTH):
            return (_restore, (self.WIDTH, self._value))
        return (cls, (self._value,))

    def __str__(self) -> str:
        return self._value

    def __repr__(self) -> str:
        return f'hex({self.WIDTH})"{self._value}"'

    def __len__(self) -> int:
        return self.WIDTH

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, HexString):
            return NotImplemented
        return self.WIDTH == other.WIDTH and self._value == other._value

    def __lt__(self, other: "HexString") -> bool:
        if not isinstance(other, HexString):
            return NotImplemented
        return self._value < other._value

    def __hash__(self) -> int:
        return hash((self.WIDTH, self._value))


def _restore(width: int, value: str) -> HexString:
    return hex_string_type(width)(value)


@lru_cache(maxsize=None)
def hex_string_type(width: int) -> type[HexString]:
    """Return the HexString subclass for ``width`` characters.

    The same class object is returned for repeated calls with one width, so
    values built through it compare and hash consistently.
    """
    if width < 0:
        raise ValueError(f"Width must be non-negative, got {width}")
    return type(f"HexString{width}", (HexString,), {"WIDTH": width, "__slots__": ()})
