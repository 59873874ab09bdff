"""Calculator configuration: word width and operator precedence."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Tuple

from .types import DEFAULT_WIDTH, mask_for


MIN_WIDTH = 2
MAX_WIDTH = 64

# Binary operator tiers, loosest first. Every tier is left-associative.
PRECEDENCE_PRESETS: Dict[str, Tuple[Tuple[str, ...], ...]] = {
    'standard': (
        ('+', '-'),
        ('|', '^'),
        ('&',),
        ('<<', '>>'),
        ('*', '/'),
    ),
    # C ordering
    'c': (
        ('|',),
        ('^',),
        ('&',),
        ('<<', '>>'),
        ('+', '-'),
        ('*', '/'),
    ),
}

DEFAULT_PRECEDENCE = 'standard'


@dataclass(frozen=True)
class CalcConfig:
    """Settings shared by the parser and the evaluator of one session."""
    width: int = DEFAULT_WIDTH
    precedence: str = DEFAULT_PRECEDENCE

    def __post_init__(self):
        if not isinstance(self.width, int) or not MIN_WIDTH <= self.width <= MAX_WIDTH:
            raise ValueError(f'width must be an integer between {MIN_WIDTH} and {MAX_WIDTH}, got {self.width!r}')
        if self.precedence not in PRECEDENCE_PRESETS:
            known = ', '.join(sorted(PRECEDENCE_PRESETS))
            raise ValueError(f'unknown precedence preset {self.precedence!r} (known: {known})')

    @property
    def mask(self) -> int:
        return mask_for(self.width)

    @property
    def tiers(self) -> Tuple[Tuple[str, ...], ...]:
        return PRECEDENCE_PRESETS[self.precedence]
