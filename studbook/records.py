"""
Записи животных и индекс по кличке.

Родословная приходит плоским списком записей ``{Name, Sire, Dam, ...}``;
родители – это клички, а не ссылки, поэтому граф предков восстанавливается
через поиск по индексу. Ключ поиска нормализуется (strip + casefold),
хранимые клички остаются как есть.
"""
from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Mapping, Tuple

import pandas as pd

LOGGER = logging.getLogger(__name__)

CORE_FIELDS = ("Name", "Sire", "Dam")


def _is_blank(value: Any) -> bool:
    # pandas отдаёт пустые ячейки как NaN
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return pd.api.types.is_scalar(value) and bool(pd.isna(value))


def _clean(value: Any) -> str | None:
    if _is_blank(value):
        return None
    return value if isinstance(value, str) else str(value)


def normalize_name(name: str | None) -> str:
    return (name or "").strip().casefold()


@dataclass(frozen=True)
class Animal:
    """Ядро записи (кличка, отец, мать) + непрозрачные метаданные."""
    name: str
    sire: str | None = None
    dam: str | None = None
    metadata: Dict[str, Any] = field(default_factory=dict, compare=False, repr=False)

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "Animal":
        metadata = {k: v for k, v in record.items() if k not in CORE_FIELDS and not _is_blank(v)}
        return cls(
            name=_clean(record.get("Name")) or "",
            sire=_clean(record.get("Sire")),
            dam=_clean(record.get("Dam")),
            metadata=metadata,
        )


class AncestryIndex:
    """Неизменяемый индекс кличка → запись."""

    def __init__(self, by_name: Dict[str, Animal]):
        self._by_name = dict(by_name)

    @classmethod
    def build(cls, records: Iterable[Animal | Mapping[str, Any]]) -> "AncestryIndex":
        """
        Строит индекс. При повторяющихся кличках побеждает последняя запись,
        записи с пустой кличкой пропускаются.
        """
        by_name: Dict[str, Animal] = {}
        for rec in records:
            animal = rec if isinstance(rec, Animal) else Animal.from_record(rec)
            key = normalize_name(animal.name)
            if not key:
                continue
            if key in by_name:
                LOGGER.debug("Duplicate name %r, keeping the last record", animal.name)
            by_name[key] = animal
        return cls(by_name)

    @classmethod
    def from_frame(cls, frame: pd.DataFrame) -> "AncestryIndex":
        return cls.build(frame.to_dict("records"))

    def lookup(self, name: str | None) -> Animal | None:
        key = normalize_name(name)
        if not key:
            return None
        return self._by_name.get(key)

    def resolve_parents(self, animal: Animal | None) -> Tuple[Animal | None, Animal | None]:
        """(отец, мать) для ``animal``; неизвестные родители – ``None``."""
        if animal is None:
            return None, None
        return self.lookup(animal.sire), self.lookup(animal.dam)

    def __len__(self) -> int:
        return len(self._by_name)

    def __iter__(self):
        return iter(self._by_name.values())

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.lookup(name) is not None
