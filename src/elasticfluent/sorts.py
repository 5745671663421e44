"""排序节点模块."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from elasticfluent.core.operators import SortDirection
from elasticfluent.typing import Document


class Sort(ABC):
    """排序节点抽象基类."""

    @abstractmethod
    def to_dict(self) -> Document | str:
        """序列化为 sort 列表中的一项."""
        pass


class FieldSort(Sort):
    """
    字段排序: {field: {"order": "asc", **params}}.

    Args:
        field: 排序字段
        order: 排序方向
        **params: 其他排序参数，如 missing、mode、unmapped_type
    """

    def __init__(self, field: str, order: SortDirection | str = SortDirection.ASC, **params: Any):
        self.field = field
        self.order = SortDirection(order)
        self.params = params

    def to_dict(self) -> Document:
        return {self.field: {"order": self.order.value, **self.params}}


class ScoreSort(Sort):
    """按相关性得分排序: {"_score": {"order": "desc"}}."""

    def __init__(self, order: SortDirection | str = SortDirection.DESC):
        self.order = SortDirection(order)

    def to_dict(self) -> Document:
        return {"_score": {"order": self.order.value}}
