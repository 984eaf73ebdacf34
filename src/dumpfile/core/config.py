from __future__ import annotations

from dataclasses import dataclass

DUMP_WIDTHS = (4, 8, 12, 16, 24, 32)  # choices offered on the command line
DEFAULT_WIDTH = 16
OFFSET_DIGITS = 8
BUFFER_SIZE = 0x10000  # 64 KiB read blocks


@dataclass(frozen=True)
class DumpConfig:
    bytes_per_line: int = DEFAULT_WIDTH
    eight_bit_text: bool = False
    offset_digits: int = OFFSET_DIGITS
    block_size: int = BUFFER_SIZE

    def __post_init__(self) -> None:
        if self.bytes_per_line < 1:
            raise ValueError(f"bytes per line must be positive, got {self.bytes_per_line}")
        if not 1 <= self.offset_digits <= 16:
            raise ValueError(f"offset digits must be 1..16, got {self.offset_digits}")
        if self.block_size < 1:
            raise ValueError(f"block size must be positive, got {self.block_size}")
