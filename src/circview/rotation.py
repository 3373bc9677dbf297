#!/usr/bin/env python
# coding: utf-8

from __future__ import annotations
from typing import Optional
from collections.abc import Iterator
from .coordinates import CoordinateMapper
from ._type_alias import Angle, Direction, Position


class RotationController:
    """
    Continuous rotation of the circular view, advanced one step per scheduler tick while spinning.

    The stored ``angle`` accumulates without bound; the residue shown at the reference point (12 o'clock)
    is derived from it through the :class:`CoordinateMapper`.

    >>> rotation = RotationController(CoordinateMapper(400))
    >>> rotation.go_to(101)
    True
    >>> rotation.angle, rotation.current_position
    (-90.0, 101)
    >>> rotation.start(1)
    >>> [rotation.tick(), rotation.tick()]
    [True, True]
    >>> rotation.current_position
    99
    >>> rotation.stop()
    >>> rotation.tick()
    False
    """

    def __init__(
        self,
        mapper: CoordinateMapper,
        *,
        speed: float = 1.0,
        residues_per_step: float = 1,
        angle: Angle = 0.0,
    ):
        if speed <= 0:
            raise ValueError(f"Invalid value for `speed`: {speed!r}. Expecting `speed > 0`.")
        if residues_per_step <= 0:
            raise ValueError(
                f"Invalid value for `residues_per_step`: {residues_per_step!r}. Expecting `residues_per_step > 0`."
            )
        self._mapper: CoordinateMapper = mapper
        self.speed: float = speed
        self.step_size: Angle = residues_per_step * mapper.residue_angle
        self.angle: Angle = angle
        self.direction: Direction = 1
        self._spinning: bool = False

    @property
    def mapper(self) -> CoordinateMapper:
        return self._mapper

    @property
    def spinning(self) -> bool:
        return self._spinning

    @property
    def effective_angle(self) -> Angle:
        "``angle`` normalized into ``[0, full_circle)``."
        return self.angle % self._mapper.full_circle

    @property
    def current_position(self) -> Position:
        "The residue currently at the reference point."
        return self._mapper.angle_to_position(-self.angle)

    def start(self, direction: Direction) -> None:
        """
        :param direction: ``1`` to rotate clockwise, ``-1`` to rotate counterclockwise.
        """
        if direction not in (1, -1):
            raise ValueError(f"Invalid value for `direction`: {direction!r}. Expecting 1 or -1.")
        self.direction = direction
        self._spinning = True

    def stop(self) -> None:
        # Observed by the next tick; nothing else needs cancelling.
        self._spinning = False

    def tick(self) -> bool:
        """
        Advance the rotation by one step. Returns False, leaving the angle unchanged, if rotation has been stopped.
        """
        if not self._spinning:
            return False
        self.angle += self.direction * self.step_size * self.speed
        return True

    def frames(self, max_ticks: Optional[int] = None) -> Iterator[Position]:
        """
        Cooperative rotation loop: each iteration performs one tick and yields the residue at the reference point.
        The loop ends on the first tick after :meth:`stop`, or after ``max_ticks`` ticks.
        """
        n_ticks = 0
        while max_ticks is None or n_ticks < max_ticks:
            if not self.tick():
                return
            n_ticks += 1
            yield self.current_position

    def go_to(self, position: Position) -> bool:
        """
        Rotate so that ``position`` sits at the reference point. Positions outside ``[1, L]`` are ignored and False is returned.
        """
        if not self._mapper.contains(position):
            return False
        self.angle = -self._mapper.position_to_angle(position)
        return True

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(angle={self.angle!r}, direction={self.direction!r}, "
            f"speed={self.speed!r}, spinning={self._spinning!r})"
        )
