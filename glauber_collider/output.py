"""glauber_collider/output.py

Per-event sink: one text line per event plus an in-memory record.

Line format (whitespace separated):
  index  b  npart  ncoll  trials  mult  e2  e3  e4  e5
"""

from __future__ import annotations

import sys
from dataclasses import dataclass
from typing import Dict, List, Optional, TextIO

from .event import HARMONICS, EventResult


@dataclass(frozen=True)
class EventRecord:
    index: int
    b: float
    ncoll: int
    trials: int
    npart: int
    multiplicity: float
    eccentricity: Dict[int, float]


class Output:
    def __init__(self, stream: Optional[TextIO] = None, *, quiet: bool = False, keep: bool = True):
        self.stream = sys.stdout if stream is None else stream
        self.quiet = quiet
        self.keep = keep
        self.records: List[EventRecord] = []

    @staticmethod
    def format_line(record: EventRecord) -> str:
        ecc = " ".join(f"{record.eccentricity[n]:.6f}" for n in HARMONICS)
        return (
            f"{record.index:>6d} {record.b:>8.4f} {record.npart:>4d} {record.ncoll:>5d} "
            f"{record.trials:>4d} {record.multiplicity:>12.6e} {ecc}"
        )

    def __call__(self, index: int, b: float, ncoll: int, trials: int, event: EventResult) -> None:
        record = EventRecord(
            index=int(index),
            b=float(b),
            ncoll=int(ncoll),
            trials=int(trials),
            npart=event.npart,
            multiplicity=event.multiplicity,
            eccentricity=dict(event.eccentricity),
        )
        if not self.quiet:
            self.stream.write(self.format_line(record) + "\n")
        if self.keep:
            self.records.append(record)
