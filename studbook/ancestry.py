"""
Обход предков по ссылкам Sire/Dam.

``depth`` – число поколений вместе с самим животным (как колонки в
родословной таблице), т.е. собираются предки на расстоянии 1 … depth-1.
Для полностью известной ациклической родословной размер множества
равен 2**depth - 2.

Данные не обязаны быть ациклическими (животное может оказаться своим же
предком), поэтому обход держит множество посещённых кличек. Обход идёт
в ширину, так что каждый предок впервые встречается на минимальной
глубине; повторная встреча не раскрывается и не считается второй раз.
"""
from __future__ import annotations
import logging
from collections import deque
from typing import Dict, FrozenSet, Tuple

from .records import Animal, AncestryIndex

LOGGER = logging.getLogger(__name__)


class AncestryCache:
    """
    Мемоизация на одну сессию отрисовки.

    Ключи: (кличка, depth) для множеств предков и (кличка1, кличка2, depth)
    для парных метрик. Значения одинаковы независимо от того, кто их
    посчитал первым, поэтому блокировки не нужны.
    """

    def __init__(self):
        self._ancestors: Dict[Tuple[str, int], FrozenSet[str]] = {}
        self._pairs: Dict[Tuple[str, str, int], float] = {}

    @staticmethod
    def _pair_key(name1: str, name2: str, depth: int) -> Tuple[str, str, int]:
        a, b = sorted((name1, name2))
        return a, b, depth

    def get_ancestors(self, name: str, depth: int) -> FrozenSet[str] | None:
        return self._ancestors.get((name, depth))

    def put_ancestors(self, name: str, depth: int, value: FrozenSet[str]) -> None:
        self._ancestors[(name, depth)] = value

    def get_pair(self, name1: str, name2: str, depth: int) -> float | None:
        return self._pairs.get(self._pair_key(name1, name2, depth))

    def put_pair(self, name1: str, name2: str, depth: int, value: float) -> None:
        self._pairs[self._pair_key(name1, name2, depth)] = value

    def clear(self) -> None:
        self._ancestors.clear()
        self._pairs.clear()

    def __len__(self) -> int:
        return len(self._ancestors) + len(self._pairs)


def _walk(animal: Animal, index: AncestryIndex, depth: int) -> FrozenSet[str]:
    visited = {animal.name}
    out = []
    queue = deque([(animal, 0)])
    while queue:
        node, level = queue.popleft()
        if level >= depth - 1:
            continue
        for parent in index.resolve_parents(node):
            if parent is None:
                continue
            if parent.name in visited:
                LOGGER.debug("%s: %r already visited, not expanding", animal.name, parent.name)
                continue
            visited.add(parent.name)
            out.append(parent.name)
            queue.append((parent, level + 1))
    return frozenset(out)


def ancestors_of(
    animal: Animal | None,
    index: AncestryIndex,
    depth: int,
    cache: AncestryCache | None = None,
) -> FrozenSet[str]:
    """Множество кличек предков ``animal`` в пределах ``depth`` поколений."""
    if animal is None or depth <= 0:
        return frozenset()
    if cache is not None:
        hit = cache.get_ancestors(animal.name, depth)
        if hit is not None:
            return hit
    result = _walk(animal, index, depth)
    if cache is not None:
        cache.put_ancestors(animal.name, depth, result)
    return result
