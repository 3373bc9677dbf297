#!/usr/bin/env python
# coding: utf-8

from __future__ import annotations
from typing import Literal, Collection, Mapping, TextIO
from Bio import SeqIO
from ._type_alias import Position


def load_multiple_sequences(
    file_object: TextIO,
    sequence_names: Collection[str],
    format_: Literal["fasta", "fastq"] = "fasta",
) -> Mapping[str, str]:
    sequence_dict: dict[str, str] = {}
    missing_names: list[str] = list(sequence_names)
    for record in SeqIO.parse(file_object, format=format_):
        if record.id in sequence_names:
            sequence_dict[record.id] = str(record.seq)
            missing_names = [name for name in missing_names if name not in sequence_dict]
            if not missing_names:
                break
    if missing_names:
        raise ValueError(f"Missing sequences: {missing_names!r}")
    return sequence_dict


def load_sequence(
    file: str | TextIO, sequence_name: str, format_: Literal["fasta", "fastq"] = "fasta"
) -> str:
    if isinstance(file, str):
        with open(file, "rt") as f:
            sequence_dict = load_multiple_sequences(f, [sequence_name], format_=format_)
    else:
        sequence_dict = load_multiple_sequences(file, [sequence_name], format_=format_)
    return sequence_dict[sequence_name]


def get_sequence_chunk(sequence: str, position: Position, size: int) -> str:
    """
    Returns the ``size`` residues preceding ``position`` followed by ``position`` and the ``size - 1`` residues after it, wrapping around the origin of the circular sequence.
    Returns an empty string if ``position`` lies outside ``[1, len(sequence)]``.

    >>> get_sequence_chunk("ABCDEFGHIJ", 5, 2)
    'CDEF'
    >>> get_sequence_chunk("ABCDEFGHIJ", 1, 3)
    'HIJABC'
    >>> get_sequence_chunk("ABCDEFGHIJ", 11, 3)
    ''
    """
    length = len(sequence)
    if not 1 <= position <= length:
        return ""
    index = position - 1
    return "".join(sequence[i % length] for i in range(index - size, index + size))
