"""Point charges and the registry that tracks them during a run."""
from __future__ import annotations

import itertools
import logging
from dataclasses import dataclass
from enum import Enum, Flag, auto
from typing import Callable, ClassVar, Dict, Iterator, List, Optional, Sequence, Union

from pygame.math import Vector2

logger = logging.getLogger(__name__)

PointLike = Union[Vector2, Sequence[float]]


def as_vector(point: PointLike) -> Vector2:
    """Return a new ``Vector2`` built from any 2-sequence."""

    return Vector2(point[0], point[1])


class Capability(Flag):
    """Behaviors a model element may support."""

    NONE = 0
    POSITIONABLE = auto()
    USER_CONTROLLABLE = auto()
    ANIMATABLE = auto()


@dataclass
class PointCharge:
    """A unit point charge defined by its position and sign."""

    CAPABILITIES: ClassVar[Capability] = (
        Capability.POSITIONABLE | Capability.USER_CONTROLLABLE | Capability.ANIMATABLE
    )

    position: Vector2
    sign: int
    charge_id: int = -1
    initial_position: Optional[Vector2] = None

    def __post_init__(self) -> None:
        if isinstance(self.sign, bool) or not isinstance(self.sign, int) or self.sign not in (-1, 1):
            raise ValueError(f"Charges should be +1 or -1, got {self.sign!r}")
        self.position = as_vector(self.position)
        if self.initial_position is None:
            self.initial_position = Vector2(self.position)
        else:
            self.initial_position = as_vector(self.initial_position)

    @property
    def x(self) -> float:
        return self.position.x

    @property
    def y(self) -> float:
        return self.position.y

    def has_capability(self, capability: Capability) -> bool:
        return capability in self.CAPABILITIES


class ChargeEventKind(Enum):
    ADDED = auto()
    REMOVED = auto()
    MOVED = auto()


@dataclass(frozen=True)
class ChargeEvent:
    """Notification sent to subscribers whenever the registry changes.

    ``old_position`` and ``new_position`` are only set for ``MOVED`` events and
    are copies taken when the event is sent. ``charge`` is the live charge
    (for ``REMOVED`` the one that left), so its position may have changed again
    by the time a queued event is handled.
    """

    kind: ChargeEventKind
    charge_id: int
    charge: PointCharge
    old_position: Optional[Vector2] = None
    new_position: Optional[Vector2] = None


ChargeListener = Callable[[ChargeEvent], None]


class ChargeRegistry:
    """Ordered collection of the charges currently on the board.

    Every mutation is reported to subscribers as a :class:`ChargeEvent`.
    Nothing is recomputed implicitly: listeners decide what to refresh.
    """

    def __init__(self) -> None:
        self._charges: Dict[int, PointCharge] = {}
        self._listeners: List[ChargeListener] = []
        self._ids = itertools.count()

    def __len__(self) -> int:
        return len(self._charges)

    def __iter__(self) -> Iterator[PointCharge]:
        return iter(list(self._charges.values()))

    def __contains__(self, charge_id: object) -> bool:
        return charge_id in self._charges

    def charges(self) -> List[PointCharge]:
        return list(self._charges.values())

    def positions(self) -> List[Vector2]:
        return [Vector2(charge.position) for charge in self._charges.values()]

    def get(self, charge_id: int) -> PointCharge:
        try:
            return self._charges[charge_id]
        except KeyError:
            raise KeyError(f"No charge with id {charge_id}") from None

    def subscribe(self, listener: ChargeListener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def unsubscribe(self, listener: ChargeListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def add_charge(self, position: PointLike, sign: int) -> int:
        """Place a new charge and return its id."""

        charge = PointCharge(as_vector(position), sign)
        charge.charge_id = next(self._ids)
        self._charges[charge.charge_id] = charge
        logger.debug(f"Added charge {charge.charge_id} ({sign:+d}) at ({charge.x:.3f}, {charge.y:.3f})")
        self._emit(ChargeEvent(ChargeEventKind.ADDED, charge.charge_id, charge))
        return charge.charge_id

    def remove_charge(self, charge_id: int) -> PointCharge:
        """Take a charge off the board and return it."""

        charge = self.get(charge_id)
        del self._charges[charge_id]
        logger.debug(f"Removed charge {charge_id}")
        self._emit(ChargeEvent(ChargeEventKind.REMOVED, charge_id, charge))
        return charge

    def move_charge(self, charge_id: int, new_position: PointLike) -> None:
        """Move a charge, reporting both its old and new positions."""

        charge = self.get(charge_id)
        old_position = Vector2(charge.position)
        charge.position = as_vector(new_position)
        logger.debug(f"Moved charge {charge_id} to ({charge.x:.3f}, {charge.y:.3f})")
        self._emit(
            ChargeEvent(ChargeEventKind.MOVED, charge_id, charge, old_position, Vector2(charge.position))
        )

    def return_to_origin(self, charge_id: int) -> PointCharge:
        """Send a charge back to its holding position and discard it."""

        charge = self.get(charge_id)
        if charge.position != charge.initial_position:
            self.move_charge(charge_id, charge.initial_position)
        return self.remove_charge(charge_id)

    def clear(self) -> None:
        for charge_id in list(self._charges):
            self.remove_charge(charge_id)

    def _emit(self, event: ChargeEvent) -> None:
        for listener in list(self._listeners):
            listener(event)
