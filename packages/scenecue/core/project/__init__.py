"""Project-level storage of cinematic sequences."""

from scenecue.core.project.cinematic_sequence import CinematicSequence
from scenecue.core.project.library import SequenceLibrary

__all__ = [
    "CinematicSequence",
    "SequenceLibrary",
]
