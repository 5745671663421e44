"""Term 级别查询节点."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from elasticfluent.queries.base import FieldValueQuery, Query
from elasticfluent.typing import Document


class TermQuery(FieldValueQuery):
    """精确值查询: {"term": {field: value}}."""

    type_tag = "term"


class TermsQuery(Query):
    """多值精确查询: {"terms": {field: [values]}}."""

    type_tag = "terms"

    def __init__(self, field: str, values: Iterable[Any], **params: Any):
        super().__init__(**params)
        self.field = field
        self.values = list(values)

    def payload(self) -> Document:
        return self._merge({self.field: list(self.values)})


class RangeQuery(Query):
    """
    范围查询: {"range": {field: {"gte": ..., "lte": ...}}}.

    Args:
        field: 字段名
        **bounds: 范围参数，如 gt/gte/lt/lte/format/time_zone/boost
    """

    type_tag = "range"

    def __init__(self, field: str, **bounds: Any):
        super().__init__(**bounds)
        self.field = field

    @classmethod
    def between(cls, field: str, min_value: Any, max_value: Any, **params: Any) -> RangeQuery:
        """构建闭区间范围查询."""
        return cls(field, gte=min_value, lte=max_value, **params)

    def payload(self) -> Document:
        return {self.field: dict(self._params)}


class ExistsQuery(Query):
    """字段存在查询: {"exists": {"field": field}}."""

    type_tag = "exists"

    def __init__(self, field: str, **params: Any):
        super().__init__(**params)
        self.field = field

    def payload(self) -> Document:
        return self._merge({"field": self.field})


class WildcardQuery(FieldValueQuery):
    """通配符查询: {"wildcard": {field: pattern}}."""

    type_tag = "wildcard"
