"""聚合节点模块."""

from __future__ import annotations

import copy
from abc import ABC, abstractmethod
from typing import Any

from elasticfluent.core.constants import INVALID_AGGREGATION_NAME_CHARACTERS
from elasticfluent.typing import Document, RangeList


def validate_aggregation_name(name: str) -> None:
    """
    验证聚合名称是否有效.

    Args:
        name: 聚合名称

    Raises:
        ValueError: 聚合名称无效时抛出

    说明:
        ES 聚合名称不能包含以下字符：
        - 双引号 ("): JSON 解析问题
        - 点号 (.): ES 使用点号作为字段路径分隔符
        - 空格 ( ): 避免 URL 编码问题
    """
    if not name:
        raise ValueError("聚合名称不能为空")
    if not isinstance(name, str):
        raise ValueError("聚合名称必须是字符串")
    for char, char_name in INVALID_AGGREGATION_NAME_CHARACTERS.items():
        if char in name:
            raise ValueError(f"聚合名称不能包含{char_name}: '{char}'")


class Aggregation(ABC):
    """
    聚合节点抽象基类.

    序列化格式为 {type_tag: payload(), "aggs": {子聚合}}，
    子聚合为空时省略 "aggs".
    """

    def __init__(self, name: str):
        validate_aggregation_name(name)
        self.name = name
        self._sub_aggregations: dict[str, Aggregation] = {}

    @property
    @abstractmethod
    def type_tag(self) -> str:
        """聚合类型，如 terms、stats、range."""
        pass

    @abstractmethod
    def payload(self) -> Document:
        """聚合参数."""
        pass

    def add_aggregation(self, aggregation: Aggregation) -> Aggregation:
        """
        添加子聚合.

        Args:
            aggregation: 子聚合节点

        Returns:
            self，支持链式调用
        """
        self._sub_aggregations[aggregation.name] = aggregation
        return self

    @property
    def sub_aggregations(self) -> list[Aggregation]:
        return list(self._sub_aggregations.values())

    def to_dict(self) -> Document:
        output: Document = {self.type_tag: self.payload()}
        if self._sub_aggregations:
            output["aggs"] = {
                name: agg.to_dict() for name, agg in self._sub_aggregations.items()
            }
        return output


class FieldAggregation(Aggregation):
    """
    通用字段聚合.

    覆盖 terms、avg/sum/min/max、stats、extended_stats、cardinality、
    percentiles、value_count、top_hits 等只需要 field 和参数的聚合.

    使用示例:
        FieldAggregation("by_status", "terms", field="status", size=10)
        FieldAggregation("latest", "top_hits", size=3, sort=[{"create_time": "desc"}])
    """

    def __init__(self, name: str, agg_type: str, field: str | None = None, **params: Any):
        super().__init__(name)
        self.agg_type = agg_type
        self.field = field
        self.params = params

    @property
    def type_tag(self) -> str:
        return self.agg_type

    def payload(self) -> Document:
        output: Document = {}
        # top_hits 不需要 field 参数
        if self.field and self.agg_type != "top_hits":
            output["field"] = self.field
        output.update(copy.deepcopy(self.params))
        return output


class RangeAggregation(Aggregation):
    """
    范围分桶聚合.

    Args:
        name: 聚合名称
        field: 字段名
        ranges: 区间列表，如 [{"to": 100}, {"from": 100, "to": 200}, {"from": 200}]
        keyed: 是否以 key 形式返回桶
    """

    def __init__(self, name: str, field: str, ranges: RangeList, keyed: bool = False):
        super().__init__(name)
        self.field = field
        self.ranges = [dict(r) for r in ranges]
        self.keyed = keyed

    @property
    def type_tag(self) -> str:
        return "range"

    def payload(self) -> Document:
        output: Document = {"field": self.field, "ranges": [dict(r) for r in self.ranges]}
        if self.keyed:
            output["keyed"] = True
        return output
