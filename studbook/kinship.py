"""
Приближённые коэффициенты родства по совпадению кличек предков.

Это НЕ расчёт по Райту с подсчётом путей: граф предков известен только
по кличкам, поэтому все три метрики считаются через пересечение множеств
``ancestors_of``.

* COI – «инбридинг», % (0…25): доля общих предков отца и матери,
  ``shared / max(|A|, |B|, 1) * 25``. Другая историческая формула
  (по числу повторов предков) сознательно не используется.
* ALC – коэффициент потери предков (0…1): ``|U| / (2**depth - 2)``.
* COR – родство двух животных (0…1): коэффициент Жаккара
  ``|A ∩ B| / |A ∪ B|``. Формула «отношение к среднему размеру» не используется.

Все функции чистые, ``depth`` передаётся явно, при нулевом знаменателе
или неизвестных родителях возвращается 0.
"""
from __future__ import annotations
from dataclasses import dataclass

from .ancestry import AncestryCache, ancestors_of
from .records import Animal, AncestryIndex

COI_CAP = 25.0
TRIAL_NAME = "Trial Pup"

# пороги «светофора» для таблицы: (высокий, средний)
COI_BANDS = (10.0, 5.0)
ALC_BANDS = (0.7, 0.9)
COR_BANDS = (0.5, 0.25)


def coi(
    animal: Animal | None,
    index: AncestryIndex,
    depth: int,
    cache: AncestryCache | None = None,
) -> float:
    sire, dam = index.resolve_parents(animal)
    if sire is None or dam is None:
        return 0.0
    a = ancestors_of(sire, index, depth, cache)
    b = ancestors_of(dam, index, depth, cache)
    shared = len(a & b)
    return min(COI_CAP, shared / max(len(a), len(b), 1) * COI_CAP)


def alc(
    animal: Animal | None,
    index: AncestryIndex,
    depth: int,
    cache: AncestryCache | None = None,
) -> float:
    possible = 2 ** depth - 2 if depth > 0 else 0
    if animal is None or possible <= 0:
        return 0.0
    unique = len(ancestors_of(animal, index, depth, cache))
    return min(1.0, unique / possible)


def cor(
    animal1: Animal | None,
    animal2: Animal | None,
    index: AncestryIndex,
    depth: int,
    cache: AncestryCache | None = None,
    percent: bool = False,
) -> float:
    if animal1 is None or animal2 is None:
        return 0.0
    value = None
    if cache is not None:
        value = cache.get_pair(animal1.name, animal2.name, depth)
    if value is None:
        a = ancestors_of(animal1, index, depth, cache)
        b = ancestors_of(animal2, index, depth, cache)
        value = len(a & b) / max(len(a | b), 1)
        if cache is not None:
            cache.put_pair(animal1.name, animal2.name, depth, value)
    return value * 100.0 if percent else value


def cor_of_parents(
    animal: Animal | None,
    index: AncestryIndex,
    depth: int,
    cache: AncestryCache | None = None,
) -> float:
    """COR между отцом и матерью ``animal`` – то, что показывается в ячейке."""
    sire, dam = index.resolve_parents(animal)
    if sire is None or dam is None:
        return 0.0
    return cor(sire, dam, index, depth, cache)


@dataclass(frozen=True)
class TrialResult:
    offspring: Animal
    coi: float
    alc: float
    cor: float  # %


def trial_mating(
    sire: Animal | None,
    dam: Animal | None,
    index: AncestryIndex,
    depth: int,
    name: str = TRIAL_NAME,
    cache: AncestryCache | None = None,
) -> TrialResult:
    """
    Пробная вязка: виртуальный щенок от ``sire`` × ``dam`` (в индекс не
    добавляется). ALC – среднее ALC родителей, COR – между родителями, %.
    """
    offspring = Animal(
        name=name,
        sire=sire.name if sire is not None else None,
        dam=dam.name if dam is not None else None,
    )
    if sire is None or dam is None:
        return TrialResult(offspring, 0.0, 0.0, 0.0)
    return TrialResult(
        offspring=offspring,
        coi=coi(offspring, index, depth, cache),
        alc=(alc(sire, index, depth, cache) + alc(dam, index, depth, cache)) / 2,
        cor=cor(sire, dam, index, depth, cache, percent=True),
    )
