#!/usr/bin/env python
# coding: utf-8

import os
from types import SimpleNamespace
import numpy as np
import pytest
import matplotlib
import matplotlib.pyplot as plt
from matplotlib.backend_bases import MouseEvent
import circview as cv
from circview.plot import draw_annotations, get_cmap_colors, TypeColorScale


SEQUENCE = (
    "MTAVFRVGLVRLVSRATQSPNLLQAQTNALPAAFQQRCSISGKTMRGGPRVPKAAPYPYKTKKYSVFNAIFDKTSKRFDENSKVICVEGPIAAGKSKFAKELAEELDMEYYPAVDLDLIYINSYGYDMRKLDPQLPPSCRSYDVRNFCLDPSHDLAAQFQIRMYMLRYSQYIDALQHVLSTGQGVVLERSPYSDFVFMEAMFRQGYLSRGARSVYNELRQNTIGELLKPHLVIYLDLPVDAVKKQIKARNVDYEVQSKVFSDAYLSDLEQLYKQQYLKDISTHAELLIYDWTAGGETEVVVEDIERIDFNQFEADIHNKKMLDWRFPLEAEWCEARIKYCHEKPDLMNYFNVPRFDVPELVRSADDGKVWRDVWFNAPGMKYRPGYNADMGDEGLLTKTKIGINQGI"
)
FEATURES = [
    {"id": 0, "start": 19, "stop": 305, "type": "voluptate", "color": "green"},
    {"id": 1, "start": 143, "stop": 283, "type": "non", "color": "red"},
    {"id": 2, "start": 76, "stop": 238, "type": "voluptate", "color": "blue"},
    {"id": 3, "start": 355, "stop": 12, "type": "sit"},
    {"id": 4, "start": 125, "stop": 206, "type": "et"},
    {"id": 5, "start": 253, "stop": 136, "type": "proident"},
]


@pytest.fixture
def viewer() -> cv.CircularFeatureViewer:
    return cv.CircularFeatureViewer(
        target="viewer", sequence=SEQUENCE, features=FEATURES, width=715, height=505
    )


def display_point(ax, radius: float, sequence_angle: float) -> tuple[float, float]:
    theta = np.radians(90 - sequence_angle)
    return tuple(ax.transData.transform((radius * np.cos(theta), radius * np.sin(theta))))


def test_simple_example(viewer, tmp_path) -> None:
    viewer.add_annotation({"id": 14, "start": 351, "stop": 190, "type": "dolore"})
    viewer.go_to(66)
    output_path = os.path.join(tmp_path, "simple_example.png")
    viewer.savefig(output_path, dpi=100)
    assert os.path.getsize(output_path) > 10e3
    plt.close(viewer.figure)


def test_draw_annotations(viewer) -> None:
    fig, ax = plt.subplots()
    patches = viewer.draw(ax)
    assert len(patches) == len(FEATURES)
    assert sorted(a.id for a in patches.values()) == [0, 1, 2, 3, 4, 5]
    for wedge, annotation in patches.items():
        inner = min(viewer.width, viewer.height) / 4 + 12 * annotation.track
        assert wedge.r == pytest.approx(inner + 10)
        assert wedge.width == pytest.approx(10)
    wrapping = next(w for w, a in patches.items() if a.id == 3)
    # Wedge angles are counterclockwise from 3 o'clock.
    n_residues = patches[wrapping].get_length(len(SEQUENCE))
    assert n_residues == len(SEQUENCE) - 355 + 1 + 12
    assert wrapping.theta2 - wrapping.theta1 == pytest.approx(n_residues * 360 / len(SEQUENCE))
    assert ax.texts[0].get_text() == viewer.sequence_chunk
    plt.close(fig)


def test_draw_follows_rotation(viewer) -> None:
    fig, ax = plt.subplots()
    before = {a.id: w.theta2 for w, a in viewer.draw(ax).items()}
    viewer.go_to(101)
    ax.cla()
    after = {a.id: w.theta2 for w, a in viewer.draw(ax).items()}
    shift = viewer.mapper.position_to_angle(101)
    for id_ in before:
        assert after[id_] - before[id_] == pytest.approx(shift)
    plt.close(fig)


def test_draw_in_radians() -> None:
    viewer = cv.CircularFeatureViewer(sequence=SEQUENCE, features=FEATURES, unit="radians")
    fig, ax = plt.subplots()
    patches = draw_annotations(ax, viewer.annotations, viewer.mapper, color_by=TypeColorScale())
    first = next(w for w, a in patches.items() if a.id == 0)
    assert first.theta2 == pytest.approx(90 - 18 * 360 / len(SEQUENCE))
    plt.close(fig)


def test_draw_with_color_mapping(viewer) -> None:
    fig, ax = plt.subplots()
    colors = {a.id: "#ff0000" for a in viewer.annotations}
    patches = draw_annotations(ax, viewer.annotations, viewer.mapper, color_by=colors)
    for wedge in patches:
        assert matplotlib.colors.to_hex(wedge.get_facecolor()) == "#ff0000"
    plt.close(fig)


def test_draw_with_cmap(viewer) -> None:
    fig, ax = plt.subplots()
    uncolored = [a for a in viewer.annotations if a.color is None]
    patches = draw_annotations(ax, uncolored, viewer.mapper, cmap="Set2")
    palette = get_cmap_colors("Set2")
    assert [matplotlib.colors.to_hex(w.get_facecolor()) for w in patches] == palette[: len(uncolored)]
    plt.close(fig)


def test_viewer_reuses_figure(viewer, tmp_path) -> None:
    n_figures = len(plt.get_fignums())
    viewer.savefig(os.path.join(tmp_path, "first.png"), dpi=50)
    figure = viewer.figure
    assert len(plt.get_fignums()) == n_figures + 1
    viewer.go_to(101)
    assert viewer.savefig(os.path.join(tmp_path, "second.png"), dpi=50) is figure
    patches = viewer.draw()
    assert viewer.figure is figure
    assert len(plt.get_fignums()) == n_figures + 1
    assert len(figure.axes) == 1
    assert len(figure.axes[0].patches) == len(patches) == len(FEATURES)
    plt.close(figure)


def test_pointer_notifications(viewer) -> None:
    clicked, entered, left = [], [], []
    viewer.on("annotation_click", clicked.append)
    viewer.on("annotation_mouseover", entered.append)
    viewer.on("annotation_mouseout", left.append)

    fig, ax = plt.subplots(figsize=(7.15, 5.05))
    patches = viewer.draw(ax)
    fig.canvas.draw()
    picker = viewer._picker

    wedge, annotation = next((w, a) for w, a in patches.items() if a.id == 0)
    picker.on_pick(SimpleNamespace(artist=wedge))
    assert clicked == [annotation]

    # Feature 0 (19-305) lies alone at this angle on the innermost track.
    radius = min(viewer.width, viewer.height) / 4 + 5
    angle = viewer.mapper.position_to_angle(50)
    x, y = display_point(ax, radius, angle)
    picker.on_motion(MouseEvent("motion_notify_event", fig.canvas, x, y))
    assert entered == [annotation]
    picker.on_motion(MouseEvent("motion_notify_event", fig.canvas, x, y))
    assert entered == [annotation]

    x, y = display_point(ax, 5, angle)
    picker.on_motion(MouseEvent("motion_notify_event", fig.canvas, x, y))
    assert left == [annotation]
    plt.close(fig)


def test_widget(viewer) -> None:
    widget = viewer.widget
    assert viewer.widget is widget
    widget._go_to_text("101")
    assert viewer.current_position == 101
    assert widget._position_text.value == "101"

    widget._spin(1)
    assert viewer.current_position == 71
    assert viewer.rotation.spinning is False

    widget._go_to(5000)
    assert viewer.current_position == 71
    with pytest.raises(ValueError):
        widget._go_to_text("seventy")
    plt.close(widget.figure)


def test_viewer_from_files(tmp_path) -> None:
    fasta_path = os.path.join(tmp_path, "protein.fasta")
    with open(fasta_path, "w") as f:
        f.write(">protein\n" + SEQUENCE + "\n")
    gff_path = os.path.join(tmp_path, "protein.gff3")
    with open(gff_path, "w") as f:
        f.write("##gff-version 3\n")
        for feature in FEATURES:
            stop = feature["stop"]
            if feature["start"] > stop:
                stop += len(SEQUENCE)
            f.write(
                f"protein\tsrc\t{feature['type']}\t{feature['start']}\t{stop}\t.\t.\t.\tID=f{feature['id']}\n"
            )

    annotations = cv.annotation.load_annotations(
        gff_path, "gff3", "protein", sequence_length=len(SEQUENCE)
    )
    viewer = cv.CircularFeatureViewer.from_fasta(fasta_path, "protein", features=annotations)
    assert [(a.start, a.stop) for a in viewer.annotations] == [
        (f["start"], f["stop"]) for f in FEATURES
    ]
    assert [a.track for a in viewer.annotations] == [0, 1, 2, 0, 3, 4]
