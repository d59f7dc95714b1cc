"""Scene abstraction consumed by the sequencer."""

from scenecue.core.scene.impl_memory import InMemoryScene, MemorySceneObject, PropertyChange
from scenecue.core.scene.protocols import Scene, SceneObject

__all__ = [
    # Protocols
    "Scene",
    "SceneObject",
    # In-memory implementation
    "InMemoryScene",
    "MemorySceneObject",
    "PropertyChange",
]
