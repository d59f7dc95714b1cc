"""Protocols for the host scene consumed by the sequencer.

The host engine owns the object graph. The sequencer only needs to resolve
instances by object name and push position/rotation values into them.
"""

from collections.abc import Sequence
from typing import Protocol


class SceneObject(Protocol):
    """Mutable handle to one object instance in the scene.

    Setters are fire-and-forget; their return value is ignored.
    """

    def set_x(self, value: float) -> None:
        """Set the horizontal position."""
        ...

    def set_y(self, value: float) -> None:
        """Set the vertical position."""
        ...

    def set_angle(self, value: float) -> None:
        """Set the rotation in degrees."""
        ...


class Scene(Protocol):
    """Protocol for the running scene."""

    def get_objects(self, name: str) -> Sequence[SceneObject]:
        """
        Resolve every instance of the object called ``name``.

        Args:
            name: Object name as authored in the scene

        Returns:
            Instances sharing that name (empty when none exist)
        """
        ...
