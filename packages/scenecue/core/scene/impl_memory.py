"""In-memory scene for tests, dry runs and the CLI simulator."""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Callable
from dataclasses import dataclass, field

Clock = Callable[[], float]


@dataclass(frozen=True)
class PropertyChange:
    """One recorded setter call."""

    time_ms: float
    object_name: str
    prop: str
    value: float


@dataclass
class MemorySceneObject:
    """Plain object instance with x, y and angle.

    Every setter call is appended to ``history`` stamped with ``clock()``.
    """

    name: str
    x: float = 0.0
    y: float = 0.0
    angle: float = 0.0
    clock: Clock | None = field(default=None, repr=False, compare=False)
    history: list[PropertyChange] = field(default_factory=list, repr=False, compare=False)

    def set_x(self, value: float) -> None:
        self.x = value
        self._record("x", value)

    def set_y(self, value: float) -> None:
        self.y = value
        self._record("y", value)

    def set_angle(self, value: float) -> None:
        self.angle = value
        self._record("angle", value)

    def _record(self, prop: str, value: float) -> None:
        time_ms = self.clock() if self.clock else 0.0
        self.history.append(PropertyChange(time_ms, self.name, prop, value))


class InMemoryScene:
    """Scene holding MemorySceneObject instances grouped by name.

    Example:
        >>> scene = InMemoryScene()
        >>> hero = scene.create("Hero", x=5.0)
        >>> scene.get_objects("Hero") == [hero]
        True
        >>> scene.get_objects("Nobody")
        []
    """

    def __init__(self, clock: Clock | None = None) -> None:
        self._clock = clock
        self._objects: dict[str, list[MemorySceneObject]] = defaultdict(list)

    def create(self, name: str, x: float = 0.0, y: float = 0.0, angle: float = 0.0) -> MemorySceneObject:
        """Add a new instance of ``name`` and return it."""
        obj = MemorySceneObject(name=name, x=x, y=y, angle=angle, clock=self._clock)
        self._objects[name].append(obj)
        return obj

    def get_objects(self, name: str) -> list[MemorySceneObject]:
        return list(self._objects.get(name, []))

    def object_names(self) -> list[str]:
        return [name for name, objs in self._objects.items() if objs]

    def history(self) -> list[PropertyChange]:
        """Every recorded change across all objects, ordered by time."""
        changes = [c for objs in self._objects.values() for obj in objs for c in obj.history]
        return sorted(changes, key=lambda c: c.time_ms)
