"""Fleet bookkeeping: how many ships of each length are still afloat."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

from .errors import IllegalPlacement

logger = logging.getLogger(__name__)

FLEET_COMPOSITION: Mapping[int, int] = MappingProxyType({4: 1, 3: 2, 2: 3, 1: 4})


def _full_counts() -> dict[int, int]:
    return dict(FLEET_COMPOSITION)


@dataclass
class Fleet:
    """Remaining unsunk ships keyed by length."""

    counts: dict[int, int] = field(default_factory=_full_counts)

    @classmethod
    def full(cls) -> Fleet:
        """Return the standard fleet: one 4, two 3s, three 2s, four 1s."""
        return cls()

    def copy(self) -> Fleet:
        return Fleet(dict(self.counts))

    def remaining(self, length: int) -> int:
        return self.counts.get(length, 0)

    def lengths(self) -> list[int]:
        """Lengths that still have ships left, longest first."""
        return sorted((length for length, count in self.counts.items() if count > 0), reverse=True)

    def longest(self) -> int | None:
        lengths = self.lengths()
        return lengths[0] if lengths else None

    def decrement(self, length: int) -> None:
        """Mark one ship of ``length`` as resolved."""
        if self.remaining(length) <= 0:
            logger.error("fleet_decrement_rejected", extra={"length": length, "counts": dict(self.counts)})
            raise IllegalPlacement(f"No ship of length {length} left in the fleet.")
        self.counts[length] -= 1

    def total_cells(self) -> int:
        return sum(length * count for length, count in self.counts.items())

    def is_empty(self) -> bool:
        return not self.lengths()

    def summary(self) -> list[str]:
        """Human readable counters, e.g. ``"4 masted: (1/1)"``."""
        return [
            f"{length} masted: ({self.remaining(length)}/{total})"
            for length, total in sorted(FLEET_COMPOSITION.items(), reverse=True)
        ]
