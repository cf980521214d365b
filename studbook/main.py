#!/usr/bin/env python3
"""
CLI‑обёртка: родословная, отчёт по реестру или пробная вязка в CSV.

Примеры:
    python -m studbook.main --records dogs.csv --mode chart --dog "Rex"
    python -m studbook.main --records dogs.tsv --mode registry --out registry.csv
    python -m studbook.main --records dogs.csv --mode trial --sire Rex --dam Bella
"""
from __future__ import annotations
import argparse

import pandas as pd

from .model import DEFAULT_GENERATIONS, pedigree_chart, registry_report, trial_pedigree


def _parse(argv=None):
    p = argparse.ArgumentParser("studbook")
    p.add_argument("--records", required=True,
                   help="CSV/TSV реестра с колонками Name, Sire, Dam")
    p.add_argument("--mode", choices=["chart", "registry", "trial"], default="chart")
    p.add_argument("--dog", help="кличка животного для --mode chart")
    p.add_argument("--sire", help="отец для --mode trial")
    p.add_argument("--dam", help="мать для --mode trial")
    p.add_argument("--generations", type=int, default=DEFAULT_GENERATIONS,
                   help="число поколений вместе с самим животным")
    p.add_argument("--out", default="pedigree.csv")

    args = p.parse_args(argv)
    if args.mode == "chart" and not args.dog:
        p.error("--mode chart requires --dog")
    if args.mode == "trial" and not (args.sire and args.dam):
        p.error("--mode trial requires --sire and --dam")
    return args


def main(argv=None):
    args = _parse(argv)

    if args.mode == "chart":
        df: pd.DataFrame = pedigree_chart(args.records, args.dog, args.generations)
    elif args.mode == "registry":
        df = registry_report(args.records, args.generations)
    else:
        result, df = trial_pedigree(args.records, args.sire, args.dam, args.generations)
        print(f"COI {result.coi:.2f}%  ALC {result.alc:.2f}  COR {result.cor:.2f}%")

    df.to_csv(args.out, index=False)
    print(f"✅  Saved {len(df)} rows → {args.out}")


if __name__ == "__main__":
    main()
