"""Ordered collection of a project's cinematic sequences."""

from __future__ import annotations

from collections.abc import Iterator
import logging
from pathlib import Path
from typing import Any

import yaml

from scenecue.core.config.loader import detect_format, load_config
from scenecue.core.project.cinematic_sequence import CinematicSequence
from scenecue.core.utils.json import write_json

logger = logging.getLogger(__name__)


class SequenceLibrary:
    """Named CinematicSequence records in insertion order.

    Example:
        >>> library = SequenceLibrary()
        >>> library.add(CinematicSequence(name="Intro", sequence_data="{}"))
        >>> library.has("Intro"), len(library)
        (True, 1)
    """

    def __init__(self, sequences: list[CinematicSequence] | None = None) -> None:
        self._sequences: dict[str, CinematicSequence] = {}
        for sequence in sequences or []:
            self.add(sequence)

    def add(self, sequence: CinematicSequence) -> None:
        """Add or replace the sequence stored under ``sequence.name``.

        Raises:
            ValueError: If the sequence has no name
        """
        if not sequence.name:
            raise ValueError("Cannot add a cinematic sequence without a name")
        if sequence.name in self._sequences:
            logger.warning("Replacing cinematic sequence '%s'", sequence.name)
        self._sequences[sequence.name] = sequence

    def get(self, name: str) -> CinematicSequence | None:
        return self._sequences.get(name)

    def has(self, name: str) -> bool:
        return name in self._sequences

    def remove(self, name: str) -> CinematicSequence | None:
        """Remove and return the sequence called ``name`` (None if absent)."""
        return self._sequences.pop(name, None)

    def names(self) -> list[str]:
        return list(self._sequences)

    def __len__(self) -> int:
        return len(self._sequences)

    def __iter__(self) -> Iterator[CinematicSequence]:
        return iter(list(self._sequences.values()))

    def __contains__(self, name: object) -> bool:
        return name in self._sequences

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def serialize_to(self) -> list[dict[str, str]]:
        return [sequence.serialize_to() for sequence in self._sequences.values()]

    @classmethod
    def unserialize_from(cls, elements: list[dict[str, Any]]) -> SequenceLibrary:
        return cls([CinematicSequence.unserialize_from(element) for element in elements])

    @classmethod
    def load(cls, path: str | Path) -> SequenceLibrary:
        """Load a library file (JSON or YAML).

        The file holds either a list of sequences or an object with a
        ``cinematicSequences`` list, as found in project files.

        Raises:
            FileNotFoundError: If the file does not exist
            ValueError: If the content is not a sequence list
        """
        raw = load_config(path)
        if isinstance(raw, dict):
            raw = raw.get("cinematicSequences", [])
        if not isinstance(raw, list):
            raise ValueError(f"Expected a list of cinematic sequences in {path}")

        library = cls.unserialize_from(raw)
        logger.debug("Loaded %d cinematic sequences from %s", len(library), path)
        return library

    def save(self, path: str | Path) -> None:
        """Write the library as a ``cinematicSequences`` document."""
        path = Path(path)
        document = {"cinematicSequences": self.serialize_to()}
        if detect_format(path) == "json":
            write_json(path, document)
        else:
            path.parent.mkdir(parents=True, exist_ok=True)
            with path.open("w", encoding="utf-8") as f:
                yaml.safe_dump(document, f, sort_keys=False, allow_unicode=True)
