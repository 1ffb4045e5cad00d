"""Path flattener: path-command string → ordered Nx2 point array.

Parsing is a two-step affair: ``tokenize_path`` scans the string into
``PathCommand(letter, params)`` records, then ``flatten_path`` walks them
with a cursor and a sub-path start point. Curves are sampled at fixed
parameter steps so runtime stays linear in path size:

    cubic      10 samples, t = 0.1 .. 1.0
    quadratic   8 samples, t = 0.125 .. 1.0
    arc         8 steps of straight-line interpolation between endpoints

The arc handling is an approximation (no true elliptical evaluation). It is
good enough for centroid estimation but not for exact rendering, and it is
kept deliberately because changing it would shift centroids of arc-heavy
icons.

Malformed input never raises: unknown command letters are skipped along
with their operands and incomplete operand groups are dropped.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from layoutforge.engine.config import DEFAULT_CONFIG, RenderConfig

logger = logging.getLogger(__name__)

SAMPLES_CUBIC = DEFAULT_CONFIG.samples_cubic
SAMPLES_QUADRATIC = DEFAULT_CONFIG.samples_quadratic
SAMPLES_ARC = DEFAULT_CONFIG.samples_arc

# Leading-decimal forms (.5, -.33) are valid; exponents are accepted too
_TOKEN_RE = re.compile(
    r"(?P<cmd>[A-Za-z])|(?P<num>[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?)"
)

# Operands consumed per repetition of each command
_ARITY = {"M": 2, "L": 2, "H": 1, "V": 1, "C": 6, "S": 4, "Q": 4, "T": 2, "A": 7, "Z": 0}


@dataclass(frozen=True)
class PathCommand:
    letter: str
    params: tuple[float, ...] = ()

    @property
    def is_relative(self) -> bool:
        return self.letter.islower()

    @property
    def arity(self) -> int:
        return _ARITY[self.letter.upper()]

    def groups(self) -> list[tuple[float, ...]]:
        """Operand groups of full arity; a trailing partial group is dropped."""
        n = self.arity
        if n == 0:
            return []
        usable = len(self.params) - len(self.params) % n
        return [self.params[i : i + n] for i in range(0, usable, n)]


def tokenize_path(d: str) -> list[PathCommand]:
    """Scan path data into commands. Numbers before the first command are ignored."""
    commands: list[PathCommand] = []
    letter: str | None = None
    params: list[float] = []

    def _flush() -> None:
        if letter is None:
            return
        if letter.upper() not in _ARITY:
            logger.debug("Skipping unknown path command %r", letter)
            return
        commands.append(PathCommand(letter, tuple(params)))

    for match in _TOKEN_RE.finditer(d or ""):
        cmd = match.group("cmd")
        if cmd is not None:
            _flush()
            letter = cmd
            params = []
        elif letter is not None:
            params.append(float(match.group("num")))
    _flush()
    return commands


def sample_cubic(
    p0: NDArray[np.float64],
    p1: NDArray[np.float64],
    p2: NDArray[np.float64],
    p3: NDArray[np.float64],
    samples: int = SAMPLES_CUBIC,
) -> NDArray[np.float64]:
    """Points on a cubic Bézier at t = 1/samples .. 1 (the start point is excluded)."""
    t = (np.arange(1, samples + 1) / samples)[:, None]
    mt = 1 - t
    return mt**3 * p0 + 3 * mt**2 * t * p1 + 3 * mt * t**2 * p2 + t**3 * p3


def sample_quadratic(
    p0: NDArray[np.float64],
    p1: NDArray[np.float64],
    p2: NDArray[np.float64],
    samples: int = SAMPLES_QUADRATIC,
) -> NDArray[np.float64]:
    t = (np.arange(1, samples + 1) / samples)[:, None]
    mt = 1 - t
    return mt**2 * p0 + 2 * mt * t * p1 + t**2 * p2


def sample_linear(
    p0: NDArray[np.float64],
    p1: NDArray[np.float64],
    samples: int = SAMPLES_ARC,
) -> NDArray[np.float64]:
    t = (np.arange(1, samples + 1) / samples)[:, None]
    return p0 + (p1 - p0) * t


class _Walker:
    """Cursor state while walking a command list."""

    def __init__(self, config: RenderConfig) -> None:
        self.config = config
        self.cursor = np.zeros(2)
        self.start = np.zeros(2)
        # Last control point of the previous C/S or Q/T, for smooth reflection
        self.last_cubic_ctrl: NDArray[np.float64] | None = None
        self.last_quad_ctrl: NDArray[np.float64] | None = None
        self.chunks: list[NDArray[np.float64]] = []

    def _abs(self, x: float, y: float, relative: bool) -> NDArray[np.float64]:
        p = np.array([x, y], dtype=np.float64)
        return self.cursor + p if relative else p

    def _emit(self, pts: NDArray[np.float64]) -> None:
        self.chunks.append(np.atleast_2d(pts))
        self.cursor = self.chunks[-1][-1].copy()

    def _reflect(self, ctrl: NDArray[np.float64] | None) -> NDArray[np.float64]:
        if ctrl is None:
            return self.cursor.copy()
        return 2 * self.cursor - ctrl

    def step(self, command: PathCommand) -> None:
        kind = command.letter.upper()
        rel = command.is_relative
        cubic_ctrl: NDArray[np.float64] | None = None
        quad_ctrl: NDArray[np.float64] | None = None

        if kind == "Z":
            if not np.array_equal(self.cursor, self.start):
                self._emit(self.start.copy())
            self.cursor = self.start.copy()

        for i, group in enumerate(command.groups()):
            if kind == "M":
                point = self._abs(group[0], group[1], rel)
                self._emit(point)
                if i == 0:
                    self.start = point.copy()
            elif kind == "L":
                self._emit(self._abs(group[0], group[1], rel))
            elif kind == "H":
                x = self.cursor[0] + group[0] if rel else group[0]
                self._emit(np.array([x, self.cursor[1]]))
            elif kind == "V":
                y = self.cursor[1] + group[0] if rel else group[0]
                self._emit(np.array([self.cursor[0], y]))
            elif kind in ("C", "S"):
                if kind == "C":
                    c1 = self._abs(group[0], group[1], rel)
                    c2 = self._abs(group[2], group[3], rel)
                    end = self._abs(group[4], group[5], rel)
                else:
                    c1 = self._reflect(cubic_ctrl if i else self.last_cubic_ctrl)
                    c2 = self._abs(group[0], group[1], rel)
                    end = self._abs(group[2], group[3], rel)
                self._emit(sample_cubic(self.cursor, c1, c2, end, self.config.samples_cubic))
                cubic_ctrl = c2
            elif kind in ("Q", "T"):
                if kind == "Q":
                    c = self._abs(group[0], group[1], rel)
                    end = self._abs(group[2], group[3], rel)
                else:
                    c = self._reflect(quad_ctrl if i else self.last_quad_ctrl)
                    end = self._abs(group[0], group[1], rel)
                self._emit(sample_quadratic(self.cursor, c, end, self.config.samples_quadratic))
                quad_ctrl = c
            elif kind == "A":
                end = self._abs(group[5], group[6], rel)
                self._emit(sample_linear(self.cursor, end, self.config.samples_arc))

        self.last_cubic_ctrl = cubic_ctrl
        self.last_quad_ctrl = quad_ctrl

    def points(self) -> NDArray[np.float64]:
        if not self.chunks:
            return np.empty((0, 2))
        return np.vstack(self.chunks)


def flatten_commands(
    commands: list[PathCommand],
    config: RenderConfig = DEFAULT_CONFIG,
) -> NDArray[np.float64]:
    walker = _Walker(config)
    for command in commands:
        walker.step(command)
    return walker.points()


def flatten_path(d: str, config: RenderConfig = DEFAULT_CONFIG) -> NDArray[np.float64]:
    """Flatten path data into an Nx2 array of absolute points (empty → shape (0, 2))."""
    return flatten_commands(tokenize_path(d), config)
