"""Fixed-width word helpers for bitcalc.

Every value the calculator produces is a two's-complement word of a
configured width. Values are kept in their unsigned form, in the range
``0 .. 2**width - 1``; the helpers here wrap arbitrary Python integers
into that range, reinterpret a word as signed when an operation needs the
sign, and render words in the binary/decimal display format.
"""

from __future__ import annotations


DEFAULT_WIDTH = 16


def mask_for(width: int) -> int:
    """Return the all-ones mask for a word of `width` bits."""
    return (1 << width) - 1


def wrap(value: int, width: int = DEFAULT_WIDTH) -> int:
    """Reduce `value` modulo 2**width, giving the unsigned word."""
    return value & mask_for(width)


def to_signed(value: int, width: int = DEFAULT_WIDTH) -> int:
    """Reinterpret a word as a two's-complement signed integer."""
    value = wrap(value, width)
    if value >> (width - 1):
        return value - (1 << width)
    return value


def format_binary(value: int, width: int = DEFAULT_WIDTH) -> str:
    """Binary digits of the word, most significant bit first, zero padded."""
    return format(wrap(value, width), f'0{width}b')


def format_result(value: int, width: int = DEFAULT_WIDTH) -> str:
    """Render a word as ``<binary> (<unsigned decimal>)``.

    >>> format_result(12)
    '0000000000001100 (12)'
    """
    value = wrap(value, width)
    return f"{format_binary(value, width)} ({value})"
