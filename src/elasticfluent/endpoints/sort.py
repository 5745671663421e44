"""排序端点模块."""

from __future__ import annotations

from typing import Any

from elasticfluent.core.operators import SortDirection
from elasticfluent.endpoints.base import Endpoint
from elasticfluent.sorts import FieldSort, Sort
from elasticfluent.typing import Document


class SortEndpoint(Endpoint):
    """排序端点，按添加顺序输出 sort 列表."""

    name = "sort"

    def __init__(self) -> None:
        self._sorts: list[Sort] = []

    def add_sort(self, sort: Sort) -> SortEndpoint:
        self._sorts.append(sort)
        return self

    def add_field_sort(
        self, field: str, direction: SortDirection | str = SortDirection.ASC, **params: Any
    ) -> SortEndpoint:
        return self.add_sort(FieldSort(field, direction, **params))

    def normalize(self) -> list[Document | str] | None:
        if not self._sorts:
            return None
        return [sort.to_dict() for sort in self._sorts]
