#!/usr/bin/env python
# coding: utf-8

from __future__ import annotations
from typing import Union, Literal, Tuple, Protocol

AnnotationId = int
"Annotation identifier"
Position = int
"A 1-based residue position on the circular sequence."
Angle = float
"An angle, in the unit selected for the CoordinateMapper."
AngleUnit = Literal["degrees", "radians"]
Direction = Literal[1, -1]
"Rotation direction: 1 -> clockwise, -1 -> counterclockwise."
Color = Union[Tuple[float, float, float], Tuple[float, float, float, float], str]
"A color represented as one of the formats supported by Matplotlib. See https://matplotlib.org/stable/tutorials/colors/colors.html"


class Interval(Protocol):
    "Anything with closed ``start`` and ``stop`` coordinates over the circular domain."

    start: int
    stop: int
