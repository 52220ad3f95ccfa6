"""Shared randomness helpers for the identifier generators."""

from __future__ import annotations

import random
import string
from typing import Literal, Protocol, Sequence, TypeVar

T = TypeVar("T")

CharacterClass = Literal["numeric", "alpha", "alphanumeric"]

_CHARACTER_SETS: dict[str, str] = {
    "numeric": string.digits,
    "alpha": string.ascii_uppercase,
    "alphanumeric": string.ascii_uppercase + string.digits,
}

# Used whenever a caller does not inject its own source.
_SYSTEM_RANDOM = random.SystemRandom()


class RandomSource(Protocol):
    """Subset of :class:`random.Random` the generators rely on."""

    def choice(self, seq: Sequence[T]) -> T: ...


def resolve_rng(rng: RandomSource | None) -> RandomSource:
    return rng if rng is not None else _SYSTEM_RANDOM


def random_string(
    length: int,
    kind: CharacterClass = "alphanumeric",
    *,
    rng: RandomSource | None = None,
) -> str:
    """Return ``length`` characters drawn uniformly from the ``kind`` alphabet."""

    if length < 0:
        raise ValueError("length cannot be negative")
    alphabet = _CHARACTER_SETS[kind]
    source = resolve_rng(rng)
    return "".join(source.choice(alphabet) for _ in range(length))


def pick(options: Sequence[T], *, rng: RandomSource | None = None) -> T:
    """Return a uniformly chosen entry of ``options``."""

    if not options:
        raise ValueError("Cannot choose from an empty sequence")
    return resolve_rng(rng).choice(options)


__all__ = ["CharacterClass", "RandomSource", "pick", "random_string", "resolve_rng"]
