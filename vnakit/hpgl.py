"""Compile the HPGL screen plot sent by an HP8753 into drawing elements.

The analyzer answers a plot request with a stream of two-letter HPGL
commands.  :class:`HPGLCompiler` turns them into a list of elements that
a renderer can draw directly:

* :class:`Line`: a poly-line of two or more plotter points,
* :class:`Label`: a text string at a position, or after the previous label,
* :class:`TextSize`: a change of character size,
* :class:`PenSelect`: a change of pen (colour),
* :class:`LineTypeSelect`: a change of line type.

Selecting pen 0 while at the left edge marks the presumed end of a plot.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Iterable, Iterator, NamedTuple, Optional, Union

__all__ = [
    "HPGL_MAX_X",
    "HPGL_MAX_Y",
    "HPGL_P1P2_X",
    "HPGL_P1P2_Y",
    "ASPECT_CORRECTION",
    "LABEL_TERMINATOR",
    "Point",
    "Line",
    "Label",
    "TextSize",
    "PenSelect",
    "LineTypeSelect",
    "HoldState",
    "HPGLCompiler",
    "split_hpgl",
    "scale_point",
]

# Extent of the plotter coordinate space used by the analyzer's screen plot.
HPGL_MAX_X = 4000
HPGL_MAX_Y = 2600
HPGL_P1P2_X = HPGL_MAX_X
HPGL_P1P2_Y = HPGL_MAX_Y

# Without it circles come out slightly oval.
ASPECT_CORRECTION = 1.070

# Labels from the analyzer end with ETX instead of ';'.
LABEL_TERMINATOR = "\003"

_HOLD_LABEL_PREFIX = "LBHld" + LABEL_TERMINATOR
_HOLD_LABEL_Y_CH1 = 2432
_HOLD_LABEL_Y_CH2 = 384


class Point(NamedTuple):
    x: int
    y: int


@dataclass(frozen=True)
class Line:
    """A poly-line; two-point lines are the common case."""

    points: tuple[Point, ...]

    @property
    def is_two_point(self) -> bool:
        return len(self.points) == 2


@dataclass(frozen=True)
class Label:
    """Text at ``position``; a relative label continues after the previous one."""

    position: Point
    text: str
    relative: bool = False


@dataclass(frozen=True)
class TextSize:
    """Character size as a percentage of the P1-P2 span in x and y."""

    width: float
    height: float


@dataclass(frozen=True)
class PenSelect:
    pen: int


@dataclass(frozen=True)
class LineTypeSelect:
    line_type: int


Element = Union[Line, Label, TextSize, PenSelect, LineTypeSelect]


@dataclass
class HoldState:
    """Whether the analyzer's channels are in sweep hold.

    The plot shows ``Hld`` beside each channel; a channel that is not held
    gets a scan arrow there instead.
    """

    dual_channel: bool = False
    active_channel: int = 0
    channel_one_hold: bool = False
    channel_two_hold: bool = False

    @property
    def upper_held(self) -> bool:
        if self.dual_channel:
            return self.channel_one_hold
        return self.channel_two_hold if self.active_channel == 1 else self.channel_one_hold

    @property
    def lower_held(self) -> bool:
        return self.channel_two_hold


_UPPER_SCAN_ARROW: tuple[Line, ...] = (
    Line((Point(77, 2432), Point(77, 2492))),
    Line((Point(65, 2474), Point(77, 2492), Point(88, 2474))),
)
_LOWER_SCAN_ARROW: tuple[Line, ...] = (
    Line((Point(77, 384), Point(77, 444))),
    Line((Point(65, 426), Point(77, 444), Point(88, 426))),
)

_INT_RE = re.compile(r"\s*([+-]?\d+)")
_FLOAT_RE = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")
_SPACED_COMMA_RE = re.compile(r"\s*,")
_POSITION_RE = re.compile(r"\s*([+-]?\d+)(?:\s*,\s*([+-]?\d+)(?:\s*(.+))?)?", re.DOTALL)


def _int16(value: int) -> int:
    value &= 0xFFFF
    return value - 0x10000 if value & 0x8000 else value


def _scan(text: str, number_re: "re.Pattern[str]", count: int, spaced: bool) -> list[str]:
    """Read up to ``count`` comma-separated numbers, stopping at the first mismatch."""
    values: list[str] = []
    pos = 0
    while len(values) < count:
        match = number_re.match(text, pos)
        if match is None:
            break
        values.append(match.group(1))
        pos = match.end()
        if len(values) == count:
            break
        if spaced:
            comma = _SPACED_COMMA_RE.match(text, pos)
            if comma is None:
                break
            pos = comma.end()
        else:
            if text[pos : pos + 1] != ",":
                break
            pos += 1
    return values


def split_hpgl(data: Union[str, bytes]) -> list[str]:
    """Split an HPGL stream into commands.

    Ordinary commands end at ``;`` or a line break, which is dropped.
    Labels run up to and including the ETX terminator, so they may hold
    ``;`` characters.
    """
    if isinstance(data, bytes):
        data = data.decode("latin-1")
    return list(_iter_commands(data))


def _iter_commands(data: str) -> Iterator[str]:
    pos = 0
    length = len(data)
    while pos < length:
        while pos < length and data[pos] in " \t\r\n;":
            pos += 1
        if pos >= length:
            break
        if data.startswith("LB", pos):
            end = data.find(LABEL_TERMINATOR, pos)
            stop = length if end < 0 else end + 1
        else:
            ends = [i for i in (data.find(";", pos), data.find("\n", pos)) if i >= 0]
            stop = min(ends) if ends else length
        command = data[pos:stop].rstrip("\r")
        if command:
            yield command
        pos = stop


def scale_point(point: Point, area_width: float, area_height: float) -> tuple[float, float]:
    """Map a plotter point onto a drawing area of the given size."""
    scale_x = area_width / HPGL_MAX_X * ASPECT_CORRECTION
    scale_y = area_height / HPGL_MAX_Y
    left_offset = area_width / 25.0
    bottom_offset = area_height / 100.0
    return left_offset + point.x * scale_x, bottom_offset + point.y * scale_y


@dataclass
class HPGLCompiler:
    """Accumulates drawing elements from HPGL commands fed one at a time."""

    hold_state: HoldState = field(default_factory=HoldState)
    elements: list[Element] = field(default_factory=list, init=False)
    position: Point = field(default=Point(0, 0), init=False)
    pen_down: bool = field(default=False, init=False)
    presumed_end: bool = field(default=False, init=False)
    char_size: tuple[float, float] = field(default=(0.0, 0.0), init=False)
    pen: int = field(default=0, init=False)
    line_type: int = field(default=0, init=False)
    scale: tuple[int, int] = field(default=(HPGL_MAX_X, HPGL_MAX_Y), init=False)
    scaling_points: tuple[int, int] = field(default=(HPGL_P1P2_X, HPGL_P1P2_Y), init=False)
    _current_line: list[Point] = field(default_factory=list, init=False, repr=False)
    _new_position: bool = field(default=False, init=False, repr=False)

    def __init__(self, hold_state: Optional[HoldState] = None) -> None:
        self.hold_state = hold_state if hold_state is not None else HoldState()
        self.elements = []
        self.position = Point(0, 0)
        self.pen_down = False
        self.presumed_end = False
        self.char_size = (0.0, 0.0)
        self.pen = 0
        self.line_type = 0
        self.scale = (HPGL_MAX_X, HPGL_MAX_Y)
        self.scaling_points = (HPGL_P1P2_X, HPGL_P1P2_Y)
        self._current_line = []
        self._new_position = False

    def reset(self) -> None:
        """Discard the compiled plot and any open line; lift the pen."""
        self.elements = []
        self._current_line = []
        self.presumed_end = False
        self.pen_down = False

    def feed_all(self, commands: Iterable[str]) -> bool:
        """Feed several commands; return whether the plot appears finished."""
        for command in commands:
            self.feed(command)
        return self.presumed_end

    def feed(self, command: str) -> bool:
        """Compile one command; return whether the plot appears finished."""
        if len(command) < 2:
            return self.presumed_end

        mnemonic, args = command[:2], command[2:]
        if mnemonic == "PA":
            self._position_absolute(args)
        elif mnemonic == "LB":
            self._label(command, args)
        elif mnemonic == "PU":
            self._pen_up()
        elif mnemonic == "PD":
            if not self.pen_down:
                self._current_line = [self.position]
                self.pen_down = True
        elif mnemonic == "SR":
            values = _scan(args, _FLOAT_RE, 2, spaced=True)
            width, height = self.char_size
            if values:
                width = float(values[0])
            if len(values) > 1:
                height = float(values[1])
            self.char_size = (width, height)
            self.elements.append(TextSize(width, height))
        elif mnemonic == "LT":
            values = _scan(args, _INT_RE, 1, spaced=False)
            if values:
                self.line_type = int(values[0])
            self.elements.append(LineTypeSelect(self.line_type & 0xFF))
        elif mnemonic == "SP":
            self._select_pen(args)
        elif mnemonic == "IP":
            self.scaling_points = self._span(args, self.scaling_points)
        elif mnemonic == "SC":
            self.scale = self._span(args, self.scale)
        return self.presumed_end

    def _position_absolute(self, args: str) -> None:
        match = _POSITION_RE.match(args)
        trailing: Optional[str] = None
        if match is not None:
            x = _int16(int(match.group(1)))
            y = self.position.y if match.group(2) is None else _int16(int(match.group(2)))
            self.position = Point(x, y)
            trailing = match.group(3)
        if self.pen_down:
            self._current_line.append(self.position)
        # Occasionally a second command follows the coordinates.
        if trailing:
            self.feed(trailing)
        self._new_position = True

    def _label(self, command: str, text: str) -> None:
        if not text:
            return
        if command.startswith(_HOLD_LABEL_PREFIX) and self.position.x == 0:
            if self.position.y == _HOLD_LABEL_Y_CH1:
                if not self.hold_state.upper_held:
                    self.elements.extend(_UPPER_SCAN_ARROW)
                    return
            elif not self.hold_state.lower_held:
                self.elements.extend(_LOWER_SCAN_ARROW)
                return
        if text.endswith(LABEL_TERMINATOR):
            text = text[:-1]
        self.elements.append(Label(self.position, text, relative=not self._new_position))
        self._new_position = False

    def _pen_up(self) -> None:
        if self.pen_down:
            self.elements.append(Line(tuple(self._current_line)))
        self._current_line = []
        self.pen_down = False

    def _select_pen(self, args: str) -> None:
        values = _scan(args, _INT_RE, 1, spaced=False)
        if values:
            self.pen = int(values[0])
        # A pen change with the pen down ends the line in the old colour
        # and starts a new one from the same point.
        if self.pen_down:
            self.feed("PU")
            self.feed("PD")
        self.elements.append(PenSelect(self.pen & 0xFF))
        if self.pen == 0 and self.position.x == 0:
            self.presumed_end = True

    @staticmethod
    def _span(args: str, current: tuple[int, int]) -> tuple[int, int]:
        values = [int(v) for v in _scan(args, _INT_RE, 4, spaced=False)]
        x1 = values[0] if len(values) > 0 else 0
        x2 = values[1] if len(values) > 1 else current[0]
        y1 = values[2] if len(values) > 2 else 0
        y2 = values[3] if len(values) > 3 else current[1]
        return x2 - x1, y2 - y1