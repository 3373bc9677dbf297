#!/usr/bin/env python
# coding: utf-8

from __future__ import annotations
from typing import TYPE_CHECKING
import matplotlib.pyplot as plt
from matplotlib.axes import Axes
from matplotlib.figure import Figure
from IPython.display import display
import ipywidgets
from ._type_alias import Direction, Position

if TYPE_CHECKING:
    from .viewer import CircularFeatureViewer


def parse_position(text: str) -> Position:
    """
    Parse a residue position, with optional commas or underscores as thousands separators.

    >>> parse_position(" 1,204 ")
    1204
    >>> parse_position("12a")
    Traceback (most recent call last):
        ...
    ValueError: Invalid position: '12a'.
    """
    digits = "".join(x for x in text.strip() if x not in ",_")
    if not digits.isnumeric():
        raise ValueError(f"Invalid position: {text!r}.")
    return int(digits)


class CircularViewerWidget:
    def __init__(self, viewer: CircularFeatureViewer, *, spin_ticks: int = 30):
        self.viewer: CircularFeatureViewer = viewer
        self.spin_ticks: int = spin_ticks
        with plt.ioff():
            figure, ax = plt.subplots(
                figsize=(viewer.width / 100, viewer.height / 100), dpi=100
            )
        self.figure: Figure = figure
        self.ax: Axes = ax

        center_widget = ipywidgets.Output()

        rotate_left_button = ipywidgets.Button(description="<<")
        rotate_right_button = ipywidgets.Button(description=">>")
        rotate_left_button.on_click(lambda __: self._spin(1))
        rotate_right_button.on_click(lambda __: self._spin(-1))

        reset_button = ipywidgets.Button(description="Reset")
        reset_button.on_click(lambda _: self._go_to(1))

        position_text = ipywidgets.Text(
            value="",
            placeholder="Position",
            description="",
            disabled=False,
        )
        self._position_text = position_text
        go_button = ipywidgets.Button(description="Go")
        go_button.on_click(lambda __: self._go_to_text(self._position_text.value))

        footer_widget = ipywidgets.VBox(
            [
                ipywidgets.HBox([position_text, go_button, reset_button]),
                ipywidgets.HBox([rotate_left_button, rotate_right_button]),
            ]
        )
        self._center_widget = center_widget
        self._footer_widget = footer_widget

        self._app = ipywidgets.AppLayout(
            center=center_widget, footer=footer_widget, pane_heights=[0, 1, "100px"]
        )

    @property
    def app(self) -> ipywidgets.AppLayout:
        return self._app

    def _ipython_display_(self) -> None:
        self._update_display()
        display(self.app)

    def _spin(self, direction: Direction, /) -> None:
        self.viewer.start_rotation(direction)
        for __ in self.viewer.frames(self.spin_ticks):
            pass
        self.viewer.stop_rotation()
        self._update_display()

    def _go_to(self, position: Position, /) -> None:
        if self.viewer.go_to(position):
            self._update_display()

    def _go_to_text(self, text: str) -> None:
        self._go_to(parse_position(text))

    def _update_position_text(self) -> None:
        position = self.viewer.current_position
        self._position_text.value = "" if position is None else f"{position:,}"

    def _update_display(self) -> None:
        self._update_position_text()
        self.ax.cla()
        self.viewer.draw(self.ax)
        self._center_widget.clear_output(wait=True)
        with self._center_widget:
            display(self.figure)
