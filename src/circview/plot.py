#!/usr/bin/env python
# coding: utf-8

from __future__ import annotations
from typing import Literal, Callable, Optional, Union
from collections.abc import Sequence, Mapping
import numpy as np
import matplotlib as mpl
import matplotlib.pyplot as plt
from matplotlib.colors import rgb2hex
from matplotlib.axes import Axes
from matplotlib.figure import Figure
from matplotlib.patches import Wedge
from .annotation import Annotation
from .coordinates import CoordinateMapper
from .events import EventDispatcher
from ._type_alias import Angle, Color


def get_cmap_colors(
    cmap_name: str, format_: Literal["hex", "rgb"] = "hex"
) -> list[Color]:
    """
    Get all colors for a given matplotlib palette.

    Adapted from https://gist.github.com/jdbcode/33d37999f950a36b43e058d15280b536.

    >>> get_cmap_colors("Set2")
    ['#66c2a5', '#fc8d62', '#8da0cb', '#e78ac3', '#a6d854', '#ffd92f', '#e5c494', '#b3b3b3']
    """
    cmap = plt.get_cmap(cmap_name)
    colors = list({cmap(i)[:3]: None for i in range(cmap.N)})
    if format_ == "rgb":
        pass
    elif format_ == "hex":
        colors = [rgb2hex(c) for c in colors]
    else:
        raise ValueError(f"Invalid value for `format_`: {format_}. Expecting one of {'rgb', 'hex'}")
    return colors


class TypeColorScale:
    """
    Colors annotations by their own ``color``, falling back to a categorical palette indexed by ``type`` in order of first appearance.

    >>> scale = TypeColorScale("Set2")
    >>> scale(Annotation(0, 1, 5, type="gene")), scale(Annotation(1, 6, 9, type="repeat"))
    ('#66c2a5', '#fc8d62')
    >>> scale(Annotation(2, 3, 4, type="gene", color="green"))
    'green'
    """

    def __init__(self, cmap_name: str = "tab20c"):
        self._palette: list[Color] = get_cmap_colors(cmap_name)
        self._assigned: dict[str, Color] = {}

    def __call__(self, annotation: Annotation) -> Color:
        if annotation.color is not None:
            return annotation.color
        if annotation.type not in self._assigned:
            index = len(self._assigned) % len(self._palette)
            self._assigned[annotation.type] = self._palette[index]
        return self._assigned[annotation.type]


def to_display_degrees(angle: Angle, mapper: CoordinateMapper) -> float:
    "Convert a clockwise sequence angle measured from 12 o'clock into Matplotlib's counterclockwise degrees from 3 o'clock."
    if mapper.unit == "radians":
        angle = float(np.degrees(angle))
    return 90.0 - angle


def get_track_radii(
    track: int, *, inner_radius: float, track_height: float, track_spacing: float
) -> tuple[float, float]:
    """
    >>> get_track_radii(2, inner_radius=100, track_height=10, track_spacing=12)
    (124, 134)
    """
    inner = inner_radius + track_spacing * track
    return inner, inner + track_height


def draw_annotations(
    ax: Axes,
    annotations: Sequence[Annotation],
    mapper: CoordinateMapper,
    *,
    rotation: Angle = 0.0,
    inner_radius: float = 100,
    track_height: float = 10,
    track_spacing: float = 12,
    color_by: Union[Callable[[Annotation], Color], Mapping[int, Color], None] = None,
    cmap: str = "tab20c",
    edgecolor: Color = "black",
    linewidth: float = 1,
    **kw,
) -> dict[Wedge, Annotation]:
    """
    Draw each annotation as an arc on its track, rotated clockwise by ``rotation``.

    :param color_by: a callable or a mapping from annotation id to color. Defaults to a :class:`TypeColorScale` over ``cmap``.
    :returns: the drawn patches, mapped to their annotations.
    """
    if color_by is None:
        color_by = TypeColorScale(cmap)
    patches: dict[Wedge, Annotation] = {}
    for annotation in annotations:
        track = annotation.track if annotation.track is not None else 0
        inner, outer = get_track_radii(
            track,
            inner_radius=inner_radius,
            track_height=track_height,
            track_spacing=track_spacing,
        )
        start_angle, end_angle = mapper.arc_angles(annotation.start, annotation.stop)
        # Wedges run counterclockwise, so the sequence end angle becomes theta1.
        theta1 = to_display_degrees(end_angle + rotation, mapper)
        theta2 = to_display_degrees(start_angle + rotation, mapper)
        if callable(color_by):
            facecolor = color_by(annotation)
        else:
            facecolor = color_by[annotation.id]
        wedge = Wedge(
            (0, 0),
            outer,
            theta1,
            theta2,
            width=outer - inner,
            facecolor=facecolor,
            edgecolor=edgecolor,
            linewidth=linewidth,
            picker=True,
            gid=f"annotation-{annotation.id}",
            **kw,
        )
        ax.add_patch(wedge)
        patches[wedge] = annotation
    return patches


def draw_reference_line(ax: Axes, radius: float, *, color: Color = "blue", linewidth: float = 2) -> None:
    ax.plot([0, 0], [0, radius], color=color, linewidth=linewidth, zorder=3)


def draw_sequence_chunk(ax: Axes, chunk: str, *, size: float = 12) -> None:
    ax.text(
        0,
        0,
        chunk,
        ha="center",
        va="center",
        size=size,
        family="monospace",
        zorder=4,
    )


class AnnotationPicker:
    """
    Raises ``annotation_click`` on pick events, and ``annotation_mouseover`` / ``annotation_mouseout`` as the pointer enters and leaves arcs.
    """

    def __init__(self, patches: Mapping[Wedge, Annotation], events: EventDispatcher):
        self.patches: Mapping[Wedge, Annotation] = patches
        self.events: EventDispatcher = events
        self.hovered: Optional[Annotation] = None
        self.figure: Optional[Figure] = None
        self._connection_ids: list[int] = []

    def connect(self, figure: Figure) -> None:
        self.figure = figure
        canvas = figure.canvas
        self._connection_ids = [
            canvas.mpl_connect("pick_event", self.on_pick),
            canvas.mpl_connect("motion_notify_event", self.on_motion),
        ]

    def disconnect(self) -> None:
        if self.figure is not None:
            for cid in self._connection_ids:
                self.figure.canvas.mpl_disconnect(cid)
        self.figure = None
        self._connection_ids = []

    def on_pick(self, event: mpl.backend_bases.PickEvent) -> None:
        annotation = self.patches.get(event.artist)  # type: ignore[call-overload]
        if annotation is not None:
            self.events.trigger("annotation_click", annotation)

    def on_motion(self, event: mpl.backend_bases.MouseEvent) -> None:
        current: Optional[Annotation] = None
        for patch, annotation in self.patches.items():
            if patch.contains(event)[0]:
                current = annotation
                break
        if current is self.hovered:
            return
        if self.hovered is not None:
            self.events.trigger("annotation_mouseout", self.hovered)
        if current is not None:
            self.events.trigger("annotation_mouseover", current)
        self.hovered = current
