# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/axis_pump/utils.py

"""Utility functions for the axis-pump command line."""

from __future__ import annotations

import logging
import random
import re
from os import PathLike
from pathlib import Path
from typing import Sequence, Union

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt  # pylint: disable=wrong-import-position

RED = "\033[31m"
GREEN = "\033[32m"
YELLOW = "\033[33m"
RESET = "\033[0m"


class NoColorFormatter(logging.Formatter):
    """Formatter that strips ANSI color codes from log messages."""

    # Regex to match ANSI escape sequences
    ANSI_ESCAPE = re.compile(r"\033\[[0-9;]*m")

    def format(self, record: logging.LogRecord) -> str:
        """Format the record and strip ANSI codes."""
        formatted = super().format(record)
        return self.ANSI_ESCAPE.sub("", formatted)


class PlotTrace:
    """Stacked step plot of handshake lines over ticks.

    Each added line gets its own row so 0/1 traces do not overlap.
    """

    def __init__(
        self,
        outdir: Union[str, Path] = "output",
        figsize: tuple[int, int] = (12, 4),
    ):
        self.outdir = ensure_dir(outdir, True)
        self.figsize = figsize
        self.title: str = ""
        self._lines: list[tuple[str, Sequence[int], Sequence[int], str]] = []

    def add_line(
        self,
        xs: Sequence[int],
        ys: Sequence[int],
        label: str,
        color: str = "blue",
    ) -> None:
        """Add a labeled 0/1 trace."""
        if len(xs) != len(ys):
            raise ValueError(f"{label}: {len(xs)} x values vs {len(ys)} y values")
        self._lines.append((label, xs, ys, color))

    def set_title(self, title: str) -> None:
        """Set the plot title."""
        self.title = title

    def save(self, filename: str, fmt: str = "png") -> Path:
        """Render every trace and save the figure to disk."""
        fig, ax = plt.subplots(figsize=self.figsize)
        ticks: list[float] = []
        for row, (label, xs, ys, color) in enumerate(reversed(self._lines)):
            base = row * 1.5
            ax.step(xs, [base + y for y in ys], where="post", color=color)
            ticks.append(base + 0.5)
        ax.set_yticks(ticks)
        ax.set_yticklabels([line[0] for line in reversed(self._lines)])
        ax.set_xlabel("tick")
        if self.title:
            ax.set_title(self.title)
        ax.grid(True, axis="x")
        fig.tight_layout()
        path = self.outdir / f"{filename}.{fmt}"
        fig.savefig(path)
        plt.close(fig)
        logging.debug("Saved plot: %s", path)
        return path


def configure_logger(
    verbosity: str = "info", log_file: Path | None = None
) -> logging.Logger:
    """Configure and return a logger with console and optional file handlers.

    Args:
        verbosity: Log level (critical, error, warning, info, debug, notset)
        log_file: Optional path to log file. If provided, logs to both console and file.

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger()
    logger.setLevel(verbosity.upper())

    # Remove any existing handlers to avoid duplicates
    logger.handlers.clear()

    fmt = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    datefmt = "%Y-%m-%d %H:%M:%S"

    # Console handler keeps colors
    console_handler = logging.StreamHandler()
    console_handler.setLevel(verbosity.upper())
    console_handler.setFormatter(logging.Formatter(fmt=fmt, datefmt=datefmt))
    logger.addHandler(console_handler)

    # File handler strips colors
    if log_file:
        file_handler = logging.FileHandler(log_file, mode="w", encoding="utf-8")
        file_handler.setLevel(verbosity.upper())
        file_handler.setFormatter(NoColorFormatter(fmt=fmt, datefmt=datefmt))
        logger.addHandler(file_handler)

    return logging.getLogger("axis.cli")


def ensure_dir(
    d: Union[str, Path, PathLike[str]], make_if_not_exists: bool = False
) -> Path:
    """Return absolute path if directory exists, optionally create it."""
    path = Path(d)
    if not path.exists():
        if make_if_not_exists:
            path.mkdir(parents=True, exist_ok=True)
            logging.info("Created directory: %s", path)
        else:
            raise FileNotFoundError(f"Directory does not exist: {path}")
    if not path.is_dir():
        raise NotADirectoryError(f"Not a directory: {path}")
    return path.resolve()


def green(s: str) -> str:
    """Wrap text in green ANSI escape codes."""
    return f"{GREEN}{s}{RESET}"


def normalize_seed(rng: random.Random, s: str) -> int:
    """
    Normalize a seed string to an int.
    Supports 'rand'/'random'/'auto' and 0x... hex.
    Raises SystemExit on invalid input.
    """
    low = s.lower()
    if low in {"rand", "random", "auto"}:
        return rng.getrandbits(32)
    try:
        return int(s, 0) & 0xFFFF_FFFF
    except ValueError as exc:
        raise SystemExit(
            f"[axis-pump] Invalid seed '{s}'. Use decimal, 0x..., or 'random'."
        ) from exc


def red(s: str) -> str:
    """Wrap text in red ANSI escape codes."""
    return f"{RED}{s}{RESET}"


def yellow(s: str) -> str:
    """Wrap text in yellow ANSI escape codes."""
    return f"{YELLOW}{s}{RESET}"
