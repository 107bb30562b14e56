"""Run-time settings for one invocation of file2qr."""
from __future__ import annotations

import argparse
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .symbol import RecoveryLevel, recovery_level
from .terminal import RENDERERS

DEFAULT_SIZE = 256
DEFAULT_TERM_SIZE = 40
DEFAULT_RENDERER = "truecolor"

# Above roughly this many bytes even a version 40 symbol is likely too small.
CAPACITY_HINT_THRESHOLD = 2900


@dataclass(frozen=True)
class Config:
    input_path: Optional[Path] = None
    output_path: Optional[Path] = None
    size: int = DEFAULT_SIZE
    term_size: int = DEFAULT_TERM_SIZE
    recovery: RecoveryLevel = RecoveryLevel.MEDIUM
    base64: bool = False
    renderer: str = DEFAULT_RENDERER

    def __post_init__(self) -> None:
        if self.renderer not in RENDERERS:
            raise ValueError(f"Unknown renderer '{self.renderer}'. Choose from: {', '.join(RENDERERS)}")

    @property
    def to_terminal(self) -> bool:
        return self.output_path is None

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> "Config":
        return cls(
            input_path=args.files[-1] if args.files else None,
            output_path=args.output,
            size=args.size,
            term_size=args.term_size,
            recovery=recovery_level(args.recovery),
            base64=args.base64,
            renderer=args.renderer,
        )
