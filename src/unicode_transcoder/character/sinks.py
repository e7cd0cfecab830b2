"""Output sinks for encoded code units.

Codecs and the transcoder only ever call ``sink.append(unit)``, so ``list``,
``bytearray`` and ``array.array`` work as sinks without wrapping. The adapters
here cover the two other shapes callers commonly need: a fixed-capacity
buffer and a per-unit callback.
"""

from array import array
from typing import TYPE_CHECKING, Callable, Iterator, List, Protocol, runtime_checkable

from ..shared.errors import SinkOverflowError

if TYPE_CHECKING:
    from .codecs import Encoding

UnitCallback = Callable[[int], None]  # receives one code unit


@runtime_checkable
class Sink(Protocol):
    """Anything that accepts one code unit at a time."""

    def append(self, unit: int) -> None: ...


class BoundedSink:
    """Sink with a fixed capacity that refuses to grow.

    Pair it with ``EncodedView.code_unit_count_in`` to size the buffer up
    front; an undersized buffer raises instead of silently truncating.
    """

    def __init__(self, capacity: int) -> None:
        if capacity < 0:
            raise ValueError("capacity must be >= 0")
        self.capacity = capacity
        self._units: List[int] = []

    def append(self, unit: int) -> None:
        if len(self._units) >= self.capacity:
            raise SinkOverflowError(self.capacity)
        self._units.append(unit)

    @property
    def units(self) -> List[int]:
        """Copy of the units written so far."""
        return list(self._units)

    @property
    def remaining(self) -> int:
        return self.capacity - len(self._units)

    def __len__(self) -> int:
        return len(self._units)

    def __iter__(self) -> Iterator[int]:
        return iter(self._units)


class CallbackSink:
    """Sink forwarding every unit to a callable."""

    def __init__(self, callback: UnitCallback) -> None:
        self.callback = callback
        self.count = 0

    def append(self, unit: int) -> None:
        self.callback(unit)
        self.count += 1


def _typecode_for(unit_size: int) -> str:
    for typecode in ("B", "H", "I", "L"):
        if array(typecode).itemsize >= unit_size:
            return typecode
    raise ValueError(f"No array typecode holds {unit_size}-byte units")


def unit_array(encoding: "Encoding") -> array:
    """Return an empty ``array.array`` wide enough for ``encoding``'s units."""
    return array(_typecode_for(encoding.unit_size))
