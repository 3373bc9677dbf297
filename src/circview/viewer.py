#!/usr/bin/env python
# coding: utf-8

from __future__ import annotations
from typing import Optional, Any, Literal, TextIO
from collections.abc import Iterable, Iterator, Sequence
import warnings
import matplotlib.pyplot as plt
from matplotlib.axes import Axes
from matplotlib.figure import Figure
from matplotlib.patches import Wedge
from ._layout import Track
from .annotation import Annotation, AnnotationLike, AnnotationStore
from .coordinates import CoordinateMapper
from .events import EventDispatcher, Listener
from .plot import (
    AnnotationPicker,
    draw_annotations,
    draw_reference_line,
    draw_sequence_chunk,
)
from .rotation import RotationController
from .sequence import get_sequence_chunk, load_sequence
from .widget import CircularViewerWidget
from ._type_alias import AnnotationId, Angle, AngleUnit, Direction, Position


class CircularFeatureViewer:
    """
    Annotations over a circular sequence, stacked on concentric tracks, with a rotatable view.

    >>> viewer = CircularFeatureViewer(sequence="ACGT" * 100, features=[{"id": 0, "start": 19, "stop": 305}])
    >>> viewer.add_annotation({"id": 1, "start": 143, "stop": 283}).track
    1
    >>> viewer.go_to(101), viewer.current_position
    (True, 101)
    """

    def __init__(
        self,
        target: str = "circview",
        sequence: str = "",
        width: int = 500,
        height: int = 500,
        features: Iterable[AnnotationLike] = (),
        *,
        speed: float = 1.0,
        residues_per_step: float = 1,
        chunk_size: int = 10,
        unit: AngleUnit = "degrees",
    ) -> None:
        """
        :param target: identifier of the render destination.
        :param sequence: the circular sequence to be annotated.
        :param width: width of the rendered view, in pixels.
        :param height: height of the rendered view, in pixels.
        :param features: initial annotations, as :class:`Annotation` objects or mappings with ``id``, ``start``, ``stop``, and optional ``type`` and ``color``.
        :param speed: rotation speed multiplier.
        :param residues_per_step: number of residues the view rotates per tick.
        :param chunk_size: number of residues shown on each side of the reference point.
        """
        if width <= 0 or height <= 0:
            raise ValueError(
                f"Invalid view size: {width=}, {height=}. Expecting positive integers."
            )
        self.target: str = target
        self.width: int = width
        self.height: int = height
        self.chunk_size: int = chunk_size
        self._sequence: str = str(sequence)
        self.events: EventDispatcher = EventDispatcher()
        self._mapper: Optional[CoordinateMapper] = None
        self._rotation: Optional[RotationController] = None
        if self._sequence:
            self._mapper = CoordinateMapper(len(self._sequence), unit=unit)
            self._rotation = RotationController(
                self._mapper, speed=speed, residues_per_step=residues_per_step
            )
        else:
            warnings.warn("Empty sequence: annotations cannot be placed and rotation is disabled.")
        self._store: AnnotationStore = AnnotationStore(len(self._sequence), features)
        self._picker: Optional[AnnotationPicker] = None
        self._widget: Optional[CircularViewerWidget] = None
        self._figure: Optional[Figure] = None

    @classmethod
    def from_fasta(
        cls,
        file: str | TextIO,
        sequence_name: str,
        *,
        format_: Literal["fasta", "fastq"] = "fasta",
        **kw,
    ) -> CircularFeatureViewer:
        sequence = load_sequence(file, sequence_name, format_=format_)
        return cls(sequence=sequence, **kw)

    @property
    def sequence(self) -> str:
        return self._sequence

    @property
    def mapper(self) -> Optional[CoordinateMapper]:
        return self._mapper

    @property
    def rotation(self) -> Optional[RotationController]:
        return self._rotation

    @property
    def store(self) -> AnnotationStore:
        return self._store

    @property
    def annotations(self) -> Sequence[Annotation]:
        return self._store.annotations

    @property
    def tracks(self) -> Sequence[Track[Annotation]]:
        return self._store.tracks

    @property
    def angle(self) -> Angle:
        return self._rotation.angle if self._rotation is not None else 0.0

    @property
    def current_position(self) -> Optional[Position]:
        return self._rotation.current_position if self._rotation is not None else None

    @property
    def sequence_chunk(self) -> str:
        "The residues around the reference point."
        position = self.current_position
        if position is None:
            return ""
        return get_sequence_chunk(self._sequence, position, self.chunk_size)

    def on(self, channel: str, listener: Listener) -> None:
        self.events.on(channel, listener)

    def off(self, channel: str, listener: Optional[Listener] = None) -> None:
        self.events.off(channel, listener)

    def go_to(self, position: Position) -> bool:
        """
        Rotate all annotations so that ``position`` is at 12 o'clock. Positions outside the sequence are ignored.
        """
        if self._rotation is None:
            return False
        return self._rotation.go_to(position)

    def add_annotation(self, annotation: AnnotationLike) -> Annotation:
        """
        :raises InvalidAnnotationError: if the annotation lies outside the sequence or reuses a live id
        """
        added = self._store.add_annotation(annotation)
        self.events.trigger("annotation_added", added)
        return added

    def remove_annotation(self, id_: AnnotationId) -> Optional[Annotation]:
        removed = self._store.remove_annotation(id_)
        if removed is not None:
            self.events.trigger("annotation_removed", removed)
        return removed

    def reorganize(self) -> Sequence[Track[Annotation]]:
        return self._store.reorganize()

    def start_rotation(self, direction: Direction) -> None:
        if self._rotation is not None:
            self._rotation.start(direction)

    def stop_rotation(self) -> None:
        if self._rotation is not None:
            self._rotation.stop()

    def tick(self) -> bool:
        if self._rotation is None:
            return False
        return self._rotation.tick()

    def frames(self, max_ticks: Optional[int] = None) -> Iterator[Position]:
        if self._rotation is None:
            return iter(())
        return self._rotation.frames(max_ticks)

    @property
    def figure(self) -> Figure:
        "The figure used by :meth:`draw` and :meth:`savefig` when no Axes is given. Created on first use."
        if self._figure is None:
            with plt.ioff():
                self._figure, __ = plt.subplots(
                    figsize=(self.width / 100, self.height / 100), dpi=100
                )
        return self._figure

    def clear(self) -> None:
        for ax in self.figure.axes:
            ax.cla()

    def _get_inner_radius(self) -> float:
        return min(self.width, self.height) / 4

    def draw(
        self,
        ax: Optional[Axes] = None,
        *,
        track_height: float = 10,
        track_spacing: float = 12,
        inner_radius: Optional[float] = None,
        show_reference_line: bool = True,
        show_sequence_chunk: bool = True,
        annotations_kw: dict[str, Any] = {},
    ) -> dict[Wedge, Annotation]:
        """
        Draw the annotations at the current rotation angle.
        If ``ax`` is None, the viewer's own :attr:`figure` is cleared and drawn into.
        Pointer events on the figure are forwarded to the ``annotation_*`` channels.
        """
        if ax is None:
            self.clear()
            ax = self.figure.axes[0]
        if inner_radius is None:
            inner_radius = self._get_inner_radius()
        patches: dict[Wedge, Annotation] = {}
        if self._mapper is not None:
            patches = draw_annotations(
                ax,
                self.annotations,
                self._mapper,
                rotation=self.angle,
                inner_radius=inner_radius,
                track_height=track_height,
                track_spacing=track_spacing,
                **annotations_kw,
            )
        outer_radius = inner_radius + track_spacing * len(self.tracks)
        if show_reference_line:
            draw_reference_line(ax, outer_radius)
        if show_sequence_chunk:
            draw_sequence_chunk(ax, self.sequence_chunk)
        limit = max(min(self.width, self.height) / 2, outer_radius + track_spacing)
        ax.set_xlim(-limit, limit)
        ax.set_ylim(-limit, limit)
        ax.set_aspect("equal")
        ax.set_axis_off()

        if self._picker is not None:
            self._picker.disconnect()
        self._picker = AnnotationPicker(patches, self.events)
        self._picker.connect(ax.figure)
        return patches

    def savefig(self, *args, dpi=300, bbox_inches="tight", **kw) -> Figure:
        self.draw()
        self.figure.savefig(*args, dpi=dpi, bbox_inches=bbox_inches, **kw)
        return self.figure

    @property
    def widget(self) -> CircularViewerWidget:
        if self._widget is None:
            self._widget = CircularViewerWidget(self)
        return self._widget

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(target={self.target!r}, length={len(self._sequence)}, "
            f"annotations={len(self.annotations)}, tracks={len(self.tracks)})"
        )
