"""Scripting-surface bindings for the cinematic sequencer.

Exposes the two instructions the host's event sheets call:

- ``PlayCinematicSequence(sequenceNameOrJsonData)`` (action)
- ``IsCinematicSequencePlaying(sequenceName)`` (condition)
"""

from __future__ import annotations

from collections.abc import Callable
import json
import logging
from typing import Any

from scenecue.core.project.library import SequenceLibrary
from scenecue.core.scene.protocols import Scene
from scenecue.core.sequencer.player import SequencePlayer

logger = logging.getLogger(__name__)

PLAY_ACTION = "PlayCinematicSequence"
IS_PLAYING_CONDITION = "IsCinematicSequencePlaying"


class CinematicSequencerExtension:
    """Thin wrappers binding scripting instructions to a SequencePlayer.

    The play action accepts either the name of a sequence stored in the
    project library or the sequence JSON itself.

    Example:
        >>> ext = CinematicSequencerExtension(player)  # doctest: +SKIP
        >>> ext.call("PlayCinematicSequence", scene, "Intro")  # doctest: +SKIP
        >>> ext.call("IsCinematicSequencePlaying", scene, "Intro")  # doctest: +SKIP
        True
    """

    name = "CinematicSequencer"

    def __init__(self, player: SequencePlayer, library: SequenceLibrary | None = None) -> None:
        self.player = player
        self.library = library if library is not None else SequenceLibrary()
        self._actions: dict[str, Callable[..., None]] = {
            PLAY_ACTION: self.play_cinematic_sequence,
        }
        self._conditions: dict[str, Callable[..., bool]] = {
            IS_PLAYING_CONDITION: self.is_cinematic_sequence_playing,
        }

    @property
    def actions(self) -> list[str]:
        return list(self._actions)

    @property
    def conditions(self) -> list[str]:
        return list(self._conditions)

    def call(self, instruction: str, scene: Scene, *args: Any) -> Any:
        """Dispatch a scripting instruction by name.

        Raises:
            KeyError: If the instruction is not provided by this extension
        """
        func = self._actions.get(instruction) or self._conditions.get(instruction)
        if func is None:
            raise KeyError(f"Unknown {self.name} instruction: {instruction}")
        return func(scene, *args)

    def play_cinematic_sequence(self, scene: Scene, sequence_name_or_json: str) -> None:
        """Action: play a stored sequence by name, or inline sequence JSON."""
        self.player.play_sequence(scene, self.resolve_sequence_data(sequence_name_or_json))

    def is_cinematic_sequence_playing(self, scene: Scene, sequence_name: str) -> bool:
        """Condition: whether the named sequence is still playing."""
        return self.player.is_playing(scene, sequence_name)

    def resolve_sequence_data(self, sequence_name_or_json: str) -> str:
        """Stored sequence data for a library name, else the argument itself.

        A stored sequence whose document has no ``name`` still plays under
        its library name.
        """
        stored = self.library.get(sequence_name_or_json) if sequence_name_or_json else None
        if stored is None:
            return sequence_name_or_json
        logger.debug("Resolved cinematic sequence '%s' from project library", stored.name)
        return _with_name(stored.sequence_data, stored.name)


def _with_name(sequence_data: str, name: str) -> str:
    try:
        document = json.loads(sequence_data)
    except ValueError:
        # Leave malformed data for the player to report
        return sequence_data
    if isinstance(document, dict) and not document.get("name"):
        document["name"] = name
        return json.dumps(document)
    return sequence_data
