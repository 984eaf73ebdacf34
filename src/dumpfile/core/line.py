from __future__ import annotations

from dumpfile.core.config import DumpConfig
from dumpfile.utils.hexfmt import format_hex

BLANK = 0x20
MARKER = ord("|")
DOT = ord(".")

_HEX_PAIRS = [format_hex(v, 2).encode("ascii") for v in range(256)]


def is_printable(value: int, eight_bit_text: bool) -> bool:
    if value < 0x20 or value == 0x7F:
        return False
    return eight_bit_text or value < 0x7F


class DumpLine:
    """One dump row held as a fixed-size character buffer.

    Layout for ``B`` bytes per line::

        OOOOOOOO  HH HH .. HH  HH .. HH  |TT..T|

    The offset field is followed by two spaces, then the hex region where byte
    ``i`` starts at ``hex_start + 3*i + i//8`` (a double space separates each
    group of eight), then two spaces and the text field between ``|`` markers.
    Every slot exists whether or not a byte was written to it, so a short final
    line is padded with blanks.
    """

    def __init__(self, config: DumpConfig) -> None:
        width = config.bytes_per_line
        self.bytes_per_line = width
        self.eight_bit_text = config.eight_bit_text
        self.offset_digits = config.offset_digits
        self.hex_start = config.offset_digits + 2
        hex_width = 3 * width - 1 + (width - 1) // 8
        self.text_start = self.hex_start + hex_width + 3
        self.size = self.text_start + width + 1
        self._buf = bytearray(bytes([BLANK]) * self.size)

    def clear(self) -> None:
        self._buf[:] = bytes([BLANK]) * self.size

    def reset(self, offset: int) -> None:
        self.clear()
        self._buf[: self.offset_digits] = format_hex(offset, self.offset_digits).encode("ascii")
        self._buf[self.text_start - 1] = MARKER
        self._buf[self.text_start + self.bytes_per_line] = MARKER

    def hex_pos(self, index: int) -> int:
        return self.hex_start + 3 * index + index // 8

    def set_byte(self, index: int, value: int) -> None:
        if not 0 <= index < self.bytes_per_line:
            raise IndexError(f"byte index {index} outside line of {self.bytes_per_line}")
        pos = self.hex_pos(index)
        self._buf[pos : pos + 2] = _HEX_PAIRS[value]
        self._buf[self.text_start + index] = value if is_printable(value, self.eight_bit_text) else DOT

    def equals_ignoring_offset(self, other: DumpLine) -> bool:
        start = self.offset_digits
        return self._buf[start:] == other._buf[start:]

    def render(self) -> str:
        # Latin-1 maps each byte to the code point of the same value.
        return self._buf.decode("latin-1").rstrip(" ")

    def __str__(self) -> str:
        return self.render()
