#!/usr/bin/env python
# coding: utf-8

from __future__ import annotations
from typing import TypeVar, Generic
from collections.abc import Iterable
from dataclasses import dataclass, field
from math import inf
from ._type_alias import Interval

T = TypeVar("T", bound=Interval)


def covered_segments(start: float, stop: float) -> list[tuple[float, float]]:
    """
    Split a circular interval into linear closed segments.
    A wrapping interval (``start > stop``) covers ``[start, L]`` and ``[1, stop]``; since no position exceeds ``L``, the first part is left open-ended.

    >>> covered_segments(3, 8)
    [(3, 8)]
    >>> covered_segments(355, 12)
    [(355, inf), (-inf, 12)]
    """
    if start <= stop:
        return [(start, stop)]
    return [(start, inf), (-inf, stop)]


def intervals_overlap(a: Interval, b: Interval) -> bool:
    """
    Returns True if the positions covered by ``a`` and ``b`` intersect.
    Intervals are treated as being closed, so touching boundaries count as an overlap.
    The relation is symmetric.

    >>> from types import SimpleNamespace as I
    >>> intervals_overlap(I(start=355, stop=12), I(start=1, stop=5))
    True
    >>> intervals_overlap(I(start=355, stop=12), I(start=100, stop=200))
    False
    >>> intervals_overlap(I(start=7, stop=7), I(start=1, stop=7))
    True
    """
    for a_start, a_end in covered_segments(a.start, a.stop):
        for b_start, b_end in covered_segments(b.start, b.stop):
            if a_start <= b_end and b_start <= a_end:
                return True
    return False


@dataclass
class Track(Generic[T]):
    """
    A lane of mutually non-overlapping intervals, in placement order.
    """

    id: int
    features: list[T] = field(default_factory=list)

    def get_overlaps(self, interval: Interval) -> list[T]:
        return [f for f in self.features if intervals_overlap(interval, f)]

    def accepts(self, interval: Interval) -> bool:
        return len(self.get_overlaps(interval)) == 0

    def __len__(self) -> int:
        return len(self.features)


def place_interval(tracks: list[Track[T]], interval: T) -> Track[T]:
    """
    Place ``interval`` into the first track of ``tracks`` that accepts it, opening a new track when none does.
    ``tracks`` is modified in place and the receiving track is returned.
    If ``interval`` has a ``track`` attribute, it is set to the id of the receiving track.
    """
    for track in tracks:
        if track.accepts(interval):
            break
    else:
        track = Track(id=len(tracks))
        tracks.append(track)
    track.features.append(interval)
    if hasattr(interval, "track"):
        interval.track = track.id  # type: ignore[attr-defined]
    return track


def allocate_tracks(intervals: Iterable[T]) -> list[Track[T]]:
    """
    Assign each interval to a track with first-fit greedy packing, processing intervals in the given order.
    Tracks are computed from scratch on every call and numbered from 0 in order of first necessity.

    >>> from types import SimpleNamespace as I
    >>> intervals = [I(start=1, stop=2), I(start=3, stop=4), I(start=1, stop=3), I(start=9, stop=2)]
    >>> [len(t) for t in allocate_tracks(intervals)]
    [2, 1, 1]
    """
    tracks: list[Track[T]] = []
    for interval in intervals:
        place_interval(tracks, interval)
    return tracks


def renumber_tracks(groups: Iterable[Iterable[T]]) -> list[Track[T]]:
    """
    Build tracks from groups of already non-overlapping intervals, keeping their order.
    Empty groups are dropped and the remaining tracks are numbered from 0.

    >>> from types import SimpleNamespace as I
    >>> tracks = renumber_tracks([[I(start=1, stop=2, track=3)], [], [I(start=5, stop=6, track=7)]])
    >>> [t.id for t in tracks], [t.features[0].track for t in tracks]
    ([0, 1], [0, 1])
    """
    tracks: list[Track[T]] = []
    for group in groups:
        features = list(group)
        if not features:
            continue
        track = Track(id=len(tracks), features=features)
        for interval in features:
            if hasattr(interval, "track"):
                interval.track = track.id  # type: ignore[attr-defined]
        tracks.append(track)
    return tracks
