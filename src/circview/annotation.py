#!/usr/bin/env python
# coding: utf-8

from __future__ import annotations
from typing import Optional, Literal, TextIO, Any, Union
from collections.abc import Iterable, Iterator, Mapping, Container, Sequence
from dataclasses import dataclass, field
from numbers import Integral
import warnings
from ._layout import Track, allocate_tracks, place_interval, renumber_tracks
from ._type_alias import AnnotationId, Color, Position


@dataclass
class Annotation:
    """
    A labeled span over the circular sequence. ``start > stop`` denotes a span wrapping through the origin.
    ``track`` is assigned by the :class:`AnnotationStore`.
    """

    id: AnnotationId
    start: Position
    stop: Position
    type: str = ""
    color: Optional[Color] = None
    track: Optional[int] = field(default=None, compare=False)
    attributes: dict[str, Any] = field(default_factory=dict, repr=False)

    @property
    def wraps(self) -> bool:
        return self.start > self.stop

    def get_length(self, sequence_length: int) -> int:
        """
        Number of residues covered by the annotation.

        >>> Annotation(3, start=355, stop=12).get_length(400)
        58
        """
        if self.wraps:
            return sequence_length - self.start + 1 + self.stop
        return self.stop - self.start + 1

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> Annotation:
        """
        >>> Annotation.from_mapping({"id": 3, "start": 355, "stop": 12, "type": "sit"})
        Annotation(id=3, start=355, stop=12, type='sit', color=None, track=None)
        """
        missing_keys = [key for key in ("id", "start", "stop") if key not in mapping]
        if missing_keys:
            raise InvalidAnnotationError(mapping, f"missing keys {missing_keys!r}")
        return cls(
            id=mapping["id"],
            start=mapping["start"],
            stop=mapping["stop"],
            type=mapping.get("type", ""),
            color=mapping.get("color"),
            attributes=dict(mapping.get("attributes", {})),
        )


AnnotationLike = Union[Annotation, Mapping[str, Any]]


def _as_annotation(annotation: AnnotationLike) -> Annotation:
    if isinstance(annotation, Annotation):
        return annotation
    elif isinstance(annotation, Mapping):
        return Annotation.from_mapping(annotation)
    raise TypeError(
        f"Invalid type for `annotation`: {type(annotation)!r}. Expecting Annotation | Mapping[str, Any]."
    )


class InvalidAnnotationError(ValueError):
    """Exception raised for annotations that cannot be placed on the sequence."""

    def __init__(self, annotation: Any, reason: str):
        message = f"Invalid annotation {annotation!r}: {reason}."
        super().__init__(message)


class AnnotationStore:
    """
    Owns the live annotations of a circular sequence and their track assignments.

    >>> store = AnnotationStore(400, [{"id": 0, "start": 19, "stop": 305}, {"id": 3, "start": 355, "stop": 12}])
    >>> [(a.id, a.track) for a in store]
    [(0, 0), (3, 0)]
    >>> store.remove_annotation(7) is None
    True
    """

    def __init__(self, sequence_length: int, features: Iterable[AnnotationLike] = ()):
        self._sequence_length: int = sequence_length
        self._annotations: list[Annotation] = []
        self._tracks: list[Track[Annotation]] = []
        for feature in features:
            annotation = _as_annotation(feature)
            self.validate(annotation)
            self._annotations.append(annotation)
        self.reorganize()

    @property
    def sequence_length(self) -> int:
        return self._sequence_length

    @property
    def annotations(self) -> Sequence[Annotation]:
        return tuple(self._annotations)

    @property
    def tracks(self) -> Sequence[Track[Annotation]]:
        return tuple(self._tracks)

    def __len__(self) -> int:
        return len(self._annotations)

    def __iter__(self) -> Iterator[Annotation]:
        return iter(tuple(self._annotations))

    def __contains__(self, id_: object) -> bool:
        return self.get_annotation(id_) is not None  # type: ignore[arg-type]

    def get_annotation(self, id_: AnnotationId) -> Optional[Annotation]:
        for annotation in self._annotations:
            if annotation.id == id_:
                return annotation
        return None

    def validate(self, annotation: Annotation) -> None:
        """
        Integral coordinates of any type (e.g. ``numpy.int64``) are accepted and stored as ``int``.

        :raises InvalidAnnotationError: if the coordinates fall outside ``[1, L]`` or the id is already in use
        """
        length = self._sequence_length
        for name in ("start", "stop"):
            value = getattr(annotation, name)
            if not isinstance(value, Integral) or isinstance(value, bool):
                raise InvalidAnnotationError(
                    annotation, f"`{name}` must be an integer, got {value!r}"
                )
            if not 1 <= value <= length:
                raise InvalidAnnotationError(
                    annotation, f"`{name}`={value} is outside the sequence range [1, {length}]"
                )
        if any(a.id == annotation.id for a in self._annotations):
            raise InvalidAnnotationError(
                annotation, f"id {annotation.id!r} is already in use"
            )
        annotation.start, annotation.stop = int(annotation.start), int(annotation.stop)

    def add_annotation(self, annotation: AnnotationLike) -> Annotation:
        """
        Place ``annotation`` in the first existing track that accepts it, without reorganizing the other annotations.
        Returns the annotation with its ``track`` assigned.

        :raises InvalidAnnotationError: if the annotation cannot be placed; the store is left unchanged
        """
        annotation = _as_annotation(annotation)
        self.validate(annotation)
        place_interval(self._tracks, annotation)
        self._annotations.append(annotation)
        return annotation

    def remove_annotation(self, id_: AnnotationId) -> Optional[Annotation]:
        """
        Remove the annotation with id ``id_`` and reorganize the remaining annotations.
        Returns the removed annotation, or None if no annotation has that id.

        The remaining annotations are packed again from scratch, unless that would need more tracks than
        the current layout with the removed annotation taken out, in which case the current layout is kept
        (emptied track dropped, tracks renumbered). Removal therefore never increases the number of tracks.
        """
        for index, annotation in enumerate(self._annotations):
            if annotation.id == id_:
                break
        else:
            return None
        del self._annotations[index]
        pruned = [[a for a in track.features if a is not annotation] for track in self._tracks]
        tracks = allocate_tracks(self._annotations)
        if len(tracks) > sum(1 for features in pruned if features):
            tracks = renumber_tracks(pruned)
        self._tracks = tracks
        return annotation

    def reorganize(self) -> Sequence[Track[Annotation]]:
        "Reassign every live annotation to tracks from scratch, in insertion order."
        self._tracks = allocate_tracks(self._annotations)
        return self.tracks

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(sequence_length={self._sequence_length!r}, "
            f"annotations={len(self._annotations)}, tracks={len(self._tracks)})"
        )


def parse_attribute_string(
    attribute_string: str,
    *,
    field_separator: str,
    key_value_separator: str,
    multiple_value_separator: str,
    quoted_values: bool,
) -> dict[str, Union[str, list[str]]]:
    """
    >>> parse_attribute_string('gene_id "ND1"; gene_name "MT-ND1";', field_separator=";", key_value_separator=" ", multiple_value_separator=",", quoted_values=True)
    {'gene_id': 'ND1', 'gene_name': 'MT-ND1'}
    """
    # Ref: http://daler.github.io/gffutils/dialect.html
    attr_dict: dict[str, Union[str, list[str]]] = {}
    for field_string in attribute_string.split(field_separator):
        field_string = field_string.strip()
        if not field_string:
            continue
        key, value = field_string.split(key_value_separator, 1)
        if quoted_values:
            value = value.strip('"')
        items = value.split(multiple_value_separator)
        attr_dict[key] = items if len(items) > 1 else value
    return attr_dict


def _parse_file(
    file_object: TextIO,
    sequence_name: Optional[str],
    *,
    format_: Literal["gtf", "gff3"],
    features: Optional[Container[str]],
    sequence_length: Optional[int],
    first_id: int,
) -> list[Annotation]:
    # Ref: https://mblab.wustl.edu/GTF22.html
    # Ref: https://github.com/The-Sequence-Ontology/Specifications/blob/master/gff3.md
    if format_ == "gtf":
        attr_kw = dict(
            field_separator=";",
            key_value_separator=" ",
            multiple_value_separator=",",
            quoted_values=True,
        )
    elif format_ == "gff3":
        attr_kw = dict(
            field_separator=";",
            key_value_separator="=",
            multiple_value_separator=",",
            quoted_values=False,
        )
    else:
        raise ValueError(
            f"Invalid value for `format_`: {format_!r}. Expecting one of ('gtf', 'gff3')."
        )

    annotations: list[Annotation] = []
    visited_sequence_names: set[str] = set()
    skipped_lines: list[int] = []
    for line_number, line in enumerate(file_object, start=1):
        if line.startswith("#") or not line.strip():
            continue
        data = line.strip("\n").split("\t")
        seqname = data[0]
        visited_sequence_names.add(seqname)
        if sequence_name is not None and seqname != sequence_name:
            continue
        feature = data[2]
        if features is not None and feature not in features:
            continue
        start, stop = int(data[3]), int(data[4])
        if sequence_length is not None:
            # Circular GFF3 features crossing the origin end past the sequence length.
            if sequence_length < stop <= 2 * sequence_length:
                stop -= sequence_length
            if not (1 <= start <= sequence_length and 1 <= stop <= sequence_length):
                skipped_lines.append(line_number)
                continue
        attributes: dict[str, Any] = dict(
            parse_attribute_string(data[8], **attr_kw) if len(data) > 8 else {}
        )
        attributes["source"] = data[1]
        if data[6] != ".":
            attributes["strand"] = data[6]
        color = attributes.get("color")
        annotations.append(
            Annotation(
                id=first_id + len(annotations),
                start=start,
                stop=stop,
                type=feature,
                color=color if isinstance(color, str) else None,
                attributes=attributes,
            )
        )
    if skipped_lines:
        warnings.warn(
            f"Skipped {len(skipped_lines)} records outside the sequence range [1, {sequence_length}] (lines {skipped_lines[:5]!r}...)."
        )
    if (
        not annotations
        and sequence_name is not None
        and sequence_name not in visited_sequence_names
    ):
        raise ValueError(
            f"Invalid sequence name: {sequence_name!r}. Found following sequence names in the file: {visited_sequence_names!r}"
        )
    return annotations


def load_annotations(
    file: str | TextIO,
    format_: Literal["gtf", "gff3"],
    sequence_name: Optional[str] = None,
    *,
    features: Optional[Iterable[str]] = None,
    sequence_length: Optional[int] = None,
    first_id: int = 0,
) -> list[Annotation]:
    """
    Load annotations from a GTF or GFF3 file. The feature column becomes the annotation ``type``; ids are numbered from ``first_id`` in file order.

    :param sequence_name: only load records of this sequence. All records are loaded if None.
    :param features: only load records whose feature column is in ``features``. All records are loaded if None.
    :param sequence_length: if given, records outside ``[1, sequence_length]`` are skipped with a warning, and records ending past the origin become wrapping annotations.
    """
    feature_set = None if features is None else set(features)
    if isinstance(file, str):
        with open(file, "rt") as f:
            annotations = _parse_file(
                f,
                sequence_name,
                format_=format_,
                features=feature_set,
                sequence_length=sequence_length,
                first_id=first_id,
            )
    else:
        annotations = _parse_file(
            file,
            sequence_name,
            format_=format_,
            features=feature_set,
            sequence_length=sequence_length,
            first_id=first_id,
        )
    if not annotations:
        warnings.warn("No annotation records have been loaded.")
    return annotations
