"""
Вызывающий слой: загрузка реестра и сборка таблиц для отображения.

    * pedigree_chart  – ячейки родословной одного животного + COI/ALC/COR
    * registry_report – метрики по всему реестру
    * trial_pedigree  – пробная вязка sire × dam
"""
from __future__ import annotations
import logging
from pathlib import Path
from typing import Any, Iterable, Mapping, Tuple, Union

import numpy as np
import pandas as pd
from tqdm import tqdm

from .ancestry import AncestryCache
from .kinship import (
    ALC_BANDS,
    COI_BANDS,
    COR_BANDS,
    TrialResult,
    alc,
    coi,
    cor_of_parents,
    trial_mating,
)
from .layout import layout
from .records import AncestryIndex

logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")
LOGGER = logging.getLogger(__name__)

DEFAULT_GENERATIONS = 5

Records = Union[str, Path, pd.DataFrame, Iterable[Mapping[str, Any]]]


def load_records(path: str | Path) -> pd.DataFrame:
    """CSV/TSV реестра → DataFrame; строки без клички отбрасываются."""
    path = Path(path)
    sep = "\t" if path.suffix.lower() in (".tsv", ".txt") else ","
    df = pd.read_csv(path, sep=sep, dtype=str, keep_default_na=False)
    df = df.replace(r"^\s*$", np.nan, regex=True)
    if "Name" not in df.columns:
        raise ValueError(f"No 'Name' column in {str(path)!r}")
    blank = df["Name"].isna()
    if blank.any():
        LOGGER.info("🧹  Dropping %d rows without Name", int(blank.sum()))
    return df.loc[~blank].reset_index(drop=True)


def _index(records: Records) -> AncestryIndex:
    if isinstance(records, (str, Path)):
        records = load_records(records)
    if isinstance(records, pd.DataFrame):
        return AncestryIndex.from_frame(records)
    return AncestryIndex.build(records)


def _check_generations(generations: int) -> None:
    if generations < 1:
        raise ValueError(f"generations must be positive, got {generations!r}")


def _band(values: pd.Series, conditions) -> pd.Series:
    bands = pd.Series(np.select(conditions, ["high", "medium"], "low"), index=values.index, dtype=object)
    # у пустых ячеек «Unknown» метрик нет – нет и уровня
    return bands.where(values.notna())


def _add_bands(df: pd.DataFrame) -> pd.DataFrame:
    # те же пороги, что и цвета в таблице: high / medium / low
    hi, mid = COI_BANDS
    df["COI_band"] = _band(df["COI"], [df["COI"] > hi, df["COI"] > mid])
    hi, mid = ALC_BANDS
    df["ALC_band"] = _band(df["ALC"], [df["ALC"] < hi, df["ALC"] < mid])
    hi, mid = COR_BANDS
    df["COR_band"] = _band(df["COR"], [df["COR"] > hi, df["COR"] > mid])
    return df


# --------------------------------------------------------------------------- #
# 1. Родословная одного животного
# --------------------------------------------------------------------------- #
CHART_COLUMNS = ["column", "row_start", "row_span", "name", "COI", "ALC", "COR"]


def _chart_frame(subject, index: AncestryIndex, generations: int, cache: AncestryCache) -> pd.DataFrame:
    rows = []
    extra = []  # колонки метаданных в порядке появления
    for cell in layout(subject, index, generations):
        row = cell.to_dict()
        if cell.subject is None:
            row.update(COI=np.nan, ALC=np.nan, COR=np.nan)
            rows.append(row)
            continue
        row["COI"] = coi(cell.subject, index, generations, cache)
        row["ALC"] = alc(cell.subject, index, generations, cache)
        row["COR"] = cor_of_parents(cell.subject, index, generations, cache)
        for key, value in cell.subject.metadata.items():
            if key in CHART_COLUMNS:
                continue
            if key not in extra:
                extra.append(key)
            row[key] = value
        rows.append(row)
    df = pd.DataFrame(rows, columns=CHART_COLUMNS + extra)
    return _add_bands(df)


def pedigree_chart(
    records: Records,
    name: str,
    generations: int = DEFAULT_GENERATIONS,
    cache: AncestryCache | None = None,
) -> pd.DataFrame:
    _check_generations(generations)
    index = _index(records)
    subject = index.lookup(name)
    if subject is None:
        raise ValueError(f"Unknown animal: {name!r}")

    LOGGER.info("🌳  Laying out %s (%d generations) …", subject.name, generations)
    return _chart_frame(subject, index, generations, cache or AncestryCache())


# --------------------------------------------------------------------------- #
# 2. Весь реестр
# --------------------------------------------------------------------------- #
def registry_report(
    records: Records,
    generations: int = DEFAULT_GENERATIONS,
) -> pd.DataFrame:
    _check_generations(generations)
    index = _index(records)
    cache = AncestryCache()

    LOGGER.info("🔍  Computing COI/ALC/COR for %d animals …", len(index))
    rows = []
    for animal in tqdm(index, total=len(index), desc="registry"):
        rows.append(
            {
                "name": animal.name,
                "sire": animal.sire,
                "dam": animal.dam,
                "COI": coi(animal, index, generations, cache),
                "ALC": alc(animal, index, generations, cache),
                "COR": cor_of_parents(animal, index, generations, cache),
            }
        )
    df = pd.DataFrame(rows, columns=["name", "sire", "dam", "COI", "ALC", "COR"])
    return _add_bands(df)


# --------------------------------------------------------------------------- #
# 3. Пробная вязка
# --------------------------------------------------------------------------- #
def trial_pedigree(
    records: Records,
    sire: str,
    dam: str,
    generations: int = DEFAULT_GENERATIONS,
) -> Tuple[TrialResult, pd.DataFrame]:
    _check_generations(generations)
    index = _index(records)
    sire_rec, dam_rec = index.lookup(sire), index.lookup(dam)
    if sire_rec is None:
        raise ValueError(f"Unknown sire: {sire!r}")
    if dam_rec is None:
        raise ValueError(f"Unknown dam: {dam!r}")

    cache = AncestryCache()
    result = trial_mating(sire_rec, dam_rec, index, generations, cache=cache)
    LOGGER.info(
        "🐶  %s × %s: COI %.2f%%, ALC %.2f, COR %.2f%%",
        sire_rec.name, dam_rec.name, result.coi, result.alc, result.cor,
    )
    return result, _chart_frame(result.offspring, index, generations, cache)
