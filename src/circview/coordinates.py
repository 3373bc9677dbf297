#!/usr/bin/env python
# coding: utf-8

"""
Conversion between 1-based residue positions and angles on a circular sequence.

Position ``1`` sits at angle ``0`` and positions advance clockwise by ``full_circle / L`` each, so that the
domain ``[1, L]`` maps onto ``[0, full_circle)``.
"""

from __future__ import annotations
from collections.abc import Iterable
from math import pi, floor
import numpy as np
from ._type_alias import Angle, AngleUnit, Position


FULL_CIRCLES: dict[str, float] = {"degrees": 360.0, "radians": 2 * pi}


class CoordinateMapper:
    """
    Bidirectional mapping between residue positions and angles over a fixed-length circular domain.

    >>> mapper = CoordinateMapper(400)
    >>> mapper.position_to_angle(101)
    90.0
    >>> mapper.angle_to_position(90.0)
    101
    >>> mapper.angle_to_position(-0.9)
    400
    >>> CoordinateMapper(4, unit="radians").position_to_angle(3)
    3.141592653589793
    """

    def __init__(self, length: int, *, unit: AngleUnit = "degrees"):
        if length < 1:
            raise ValueError(f"Invalid sequence length: {length!r}. Expecting `length >= 1`.")
        if unit not in FULL_CIRCLES:
            raise ValueError(
                f"Invalid value for `unit`: {unit!r}. Expecting one of {tuple(FULL_CIRCLES)!r}."
            )
        self._length: int = int(length)
        self._unit: AngleUnit = unit
        self._full_circle: float = FULL_CIRCLES[unit]

    @property
    def length(self) -> int:
        return self._length

    @property
    def unit(self) -> AngleUnit:
        return self._unit

    @property
    def full_circle(self) -> float:
        return self._full_circle

    @property
    def residue_angle(self) -> Angle:
        "Angular size of a single residue."
        return self._full_circle / self._length

    def contains(self, position: Position) -> bool:
        return isinstance(position, (int, np.integer)) and 1 <= position <= self._length

    def position_to_angle(self, position: Position) -> Angle:
        """
        Returns the angle of ``position``. Positions outside ``[1, L]`` are extrapolated linearly.
        """
        return (position - 1) * self._full_circle / self._length

    def positions_to_angles(self, positions: Iterable[Position]) -> np.ndarray:
        """
        >>> CoordinateMapper(8).positions_to_angles([1, 3, 8])
        array([  0.,  90., 315.])
        """
        positions = np.asarray(list(positions), dtype=float)
        return (positions - 1) * self._full_circle / self._length

    def angle_to_position(self, angle: Angle) -> Position:
        """
        Returns the position nearest to ``angle``, wrapped into ``[1, L]``. Angles of any magnitude or sign are accepted.
        """
        offset = floor(angle / self._full_circle * self._length + 0.5)
        return offset % self._length + 1

    def arc_angles(self, start: Position, stop: Position) -> tuple[Angle, Angle]:
        """
        Returns the start and end angles of the arc covering residues ``start`` to ``stop`` inclusive.
        For a wrapping span (``start > stop``), the end angle exceeds a full circle.

        >>> mapper = CoordinateMapper(400)
        >>> mapper.arc_angles(1, 100)
        (0.0, 90.0)
        >>> mapper.arc_angles(355, 12)
        (318.6, 370.8)
        """
        theta1 = self.position_to_angle(start)
        theta2 = self.position_to_angle(stop + 1)
        if start > stop:
            theta2 += self._full_circle
        return theta1, theta2

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(length={self._length!r}, unit={self._unit!r})"
