"""聚合端点模块."""

from __future__ import annotations

import copy
from typing import Any

from elasticfluent.aggregations import Aggregation, FieldAggregation, RangeAggregation
from elasticfluent.endpoints.base import Endpoint
from elasticfluent.typing import Document, RangeList


class AggregationEndpoint(Endpoint):
    """
    聚合端点.

    同名聚合后添加的覆盖先添加的；原始聚合 DSL 在最后合并.
    """

    name = "aggs"

    def __init__(self) -> None:
        self._aggregations: dict[str, Aggregation] = {}
        self._raw_aggregations: Document = {}

    def add_aggregation(self, aggregation: Aggregation) -> AggregationEndpoint:
        self._aggregations[aggregation.name] = aggregation
        return self

    def add_field_aggregation(
        self, name: str, agg_type: str, field: str | None = None, **params: Any
    ) -> AggregationEndpoint:
        return self.add_aggregation(FieldAggregation(name, agg_type, field=field, **params))

    def add_range_bucket(self, name: str, field: str, ranges: RangeList) -> AggregationEndpoint:
        return self.add_aggregation(RangeAggregation(name, field, ranges))

    def add_raw_aggregation(self, agg_dict: Document) -> AggregationEndpoint:
        """
        添加原始聚合 DSL.

        Args:
            agg_dict: 格式如 {"agg_name": {"agg_type": {...}}}
        """
        self._raw_aggregations.update(agg_dict)
        return self

    def normalize(self) -> Document | None:
        output: Document = {name: agg.to_dict() for name, agg in self._aggregations.items()}
        output.update(copy.deepcopy(self._raw_aggregations))
        return output or None
