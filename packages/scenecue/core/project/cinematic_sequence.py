"""Project record for a cinematic sequence.

A project stores each sequence as a name plus the editor's JSON document
(kept as text, as authored) and the layout last used to preview it.
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from scenecue.core.sequencer.models import SequenceDescriptor

logger = logging.getLogger(__name__)


class CinematicSequence(BaseModel):
    """A named cinematic sequence stored in a project.

    Example:
        >>> seq = CinematicSequence(name="Intro", sequence_data='{"duration": 5.0}')
        >>> seq.is_valid(), seq.approx_duration()
        (True, 5.0)
    """

    model_config = ConfigDict(validate_assignment=True)

    name: str = ""
    sequence_data: str = Field(default="", description="JSON document managed by the editor")
    associated_layout: str = Field(default="", description="Layout used to preview the sequence")

    def clone(self) -> CinematicSequence:
        return self.model_copy(deep=True)

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def serialize_to(self) -> dict[str, str]:
        """Project-file representation."""
        return {
            "name": self.name,
            "sequenceData": self.sequence_data,
            "associatedLayout": self.associated_layout,
        }

    @classmethod
    def unserialize_from(cls, element: dict[str, Any]) -> CinematicSequence:
        """Build from a project-file element.

        Missing attributes default to empty strings. The capitalized
        ``Name`` / ``AssociatedLayout`` keys of older project files are
        accepted too.
        """
        return cls(
            name=_attribute(element, "name", "Name"),
            sequence_data=_attribute(element, "sequenceData"),
            associated_layout=_attribute(element, "associatedLayout", "AssociatedLayout"),
        )

    # ------------------------------------------------------------------
    # Content
    # ------------------------------------------------------------------

    def descriptor(self) -> SequenceDescriptor:
        """Parse the stored document.

        Raises:
            ValidationError: If the stored data is not JSON
        """
        return SequenceDescriptor.from_json(self.sequence_data)

    def validation_errors(self) -> list[str]:
        """Problems with the stored document (empty when valid)."""
        if not self.sequence_data.strip():
            return ["Sequence data is empty"]
        try:
            self.descriptor()
        except ValidationError as e:
            return [_format_error(err) for err in e.errors()]
        return []

    def is_valid(self) -> bool:
        return not self.validation_errors()

    def approx_duration(self) -> float:
        """Authored duration, else latest keyframe time; 0 for invalid data."""
        try:
            return self.descriptor().approx_duration()
        except ValidationError:
            logger.debug("Cannot compute duration of invalid sequence '%s'", self.name)
            return 0.0


def _attribute(element: dict[str, Any], key: str, legacy_key: str | None = None) -> str:
    value = element.get(key)
    if value is None and legacy_key is not None:
        value = element.get(legacy_key)
    return "" if value is None else str(value)


def _format_error(error: Any) -> str:
    location = ".".join(str(part) for part in error.get("loc", ()))
    message = error.get("msg", "invalid")
    return f"{location}: {message}" if location else message
