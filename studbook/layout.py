"""
Раскладка родословной в сетку и в дерево.

Сетка: колонка 1 – само животное на всю высоту (2**(generations-1) строк),
каждая следующая колонка делит диапазон строк родителя пополам: отец
сверху, мать снизу. Неизвестный предок даёт пустую ячейку «Unknown»,
ниже неё сетка не раскрывается. Коэффициенты здесь не считаются – их
добавляет вызывающий код с тем же ``generations``.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .records import Animal, AncestryIndex

UNKNOWN = "Unknown"


@dataclass(frozen=True)
class GridCell:
    subject: Optional[Animal]
    column: int      # 1 = само животное
    row_start: int   # с 1
    row_span: int

    @property
    def label(self) -> str:
        return self.subject.name if self.subject is not None else UNKNOWN

    def to_dict(self) -> Dict[str, Any]:
        return {
            "column": self.column,
            "row_start": self.row_start,
            "row_span": self.row_span,
            "name": self.subject.name if self.subject is not None else None,
        }


def total_rows(generations: int) -> int:
    return 2 ** max(0, generations - 1)


def layout(subject: Animal | None, index: AncestryIndex, generations: int) -> List[GridCell]:
    """Ячейки в прямом порядке обхода: узел, поддерево отца, поддерево матери."""
    out: List[GridCell] = []
    if generations < 1:
        return out

    def _place(animal: Animal | None, column: int, row_start: int, row_span: int):
        out.append(GridCell(animal, column, row_start, row_span))
        if animal is None or column >= generations:
            return
        half = max(1, row_span // 2)
        sire, dam = index.resolve_parents(animal)
        _place(sire, column + 1, row_start, half)
        _place(dam, column + 1, row_start + half, half)

    _place(subject, 1, 1, total_rows(generations))
    return out


@dataclass
class TreeNode:
    identity: str
    metadata: Dict[str, Any] = field(default_factory=dict)
    children: List["TreeNode"] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "identity": self.identity,
            "metadata": dict(self.metadata),
            "children": [c.to_dict() for c in self.children],
        }


def build_tree(subject: Animal | None, index: AncestryIndex, generations: int) -> TreeNode | None:
    """
    Дерево предков для визуализатора: дети узла – [отец, мать],
    неизвестные родители опускаются.
    """
    if subject is None or generations <= 0:
        return None
    children = []
    for parent in index.resolve_parents(subject):
        node = build_tree(parent, index, generations - 1)
        if node is not None:
            children.append(node)
    return TreeNode(subject.name, dict(subject.metadata), children)
