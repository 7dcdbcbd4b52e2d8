"""Injectable uniform random sources for the roulette engines.

The engines never call :mod:`random` directly. They draw every decision from
a :class:`RandomSource`, whose only primitive is ``random()`` returning a
float in ``[0, 1)``. ``choice`` and ``shuffle`` are built on top of that
primitive so that a fixed sequence of floats fully determines a draw.
"""

# Party Roulette
# Copyright (C) 2025  Party Roulette developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

import random
from abc import ABC, abstractmethod
from typing import Iterable, List, Optional, Sequence, TypeVar

T = TypeVar("T")


class RandomSource(ABC):
    """Source of uniform floats in ``[0, 1)``."""

    @abstractmethod
    def random(self) -> float:
        """Return the next float in ``[0, 1)``."""

    def percent(self) -> float:
        """Return a uniform draw in ``[0, 100)``."""
        return self.random() * 100

    def index(self, length: int) -> int:
        """Return a uniform index in ``range(length)``."""
        return min(int(self.random() * length), length - 1)

    def choice(self, items: Sequence[T]) -> T:
        """Pick one element uniformly at random."""
        if not items:
            raise IndexError("Cannot choose from an empty sequence")
        return items[self.index(len(items))]

    def shuffle(self, items: Iterable[T]) -> List[T]:
        """Return a uniformly shuffled copy (Fisher-Yates, back to front)."""
        shuffled = list(items)
        for i in range(len(shuffled) - 1, 0, -1):
            j = self.index(i + 1)
            shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
        return shuffled


class SystemRandomSource(RandomSource):
    """Pseudo-random source backed by :class:`random.Random`.

    Not suitable for anything security related; a party draw does not need it.
    """

    def __init__(self, seed: Optional[int] = None):
        self.seed = seed
        self._random = random.Random(seed)

    def random(self) -> float:
        return self._random.random()


class FixedSequenceRandom(RandomSource):
    """Replays a fixed list of floats, for tests and reproductions.

    Raises:
        IndexError: When more draws are requested than were supplied
    """

    def __init__(self, values: Iterable[float]):
        self.values = [float(v) for v in values]
        self.position = 0
        for value in self.values:
            if not 0.0 <= value < 1.0:
                raise ValueError(f"Random values must lie in [0, 1): {value}")

    @property
    def remaining(self) -> int:
        return len(self.values) - self.position

    def random(self) -> float:
        if self.position >= len(self.values):
            raise IndexError("FixedSequenceRandom ran out of values")
        value = self.values[self.position]
        self.position += 1
        return value
