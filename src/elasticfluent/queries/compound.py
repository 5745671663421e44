"""复合查询节点: bool 与 boosting."""

from __future__ import annotations

from typing import Any

from elasticfluent.core.operators import BoolClause
from elasticfluent.exceptions import InvalidQueryError
from elasticfluent.queries.base import Query
from elasticfluent.typing import Document


class BoolQuery(Query):
    """
    bool 查询，按子句（must / must_not / should / filter）累积子查询.

    唯一可变的查询节点：由 QueryEndpoint 创建，通过 add_query 持续追加.
    向 should 添加子查询时，如果调用方未设置 minimum_should_match，
    会自动设置为 1.

    使用示例:
        bool_query = BoolQuery()
        bool_query.add_query(TermQuery("status", "active"), BoolClause.MUST)
        bool_query.add_query(TermQuery("status", "pending"), "should")
        bool_query.to_dict()
        # {"bool": {"must": [...], "should": [...], "minimum_should_match": 1}}
    """

    type_tag = "bool"

    def __init__(self, **params: Any):
        super().__init__(**params)
        self._clauses: dict[BoolClause, list[Query]] = {}

    @property
    def clauses(self) -> dict[BoolClause, list[Query]]:
        """各子句下的子查询（按首次使用顺序）."""
        return self._clauses

    def add_query(self, query: Query, clause: BoolClause | str = BoolClause.MUST) -> BoolQuery:
        """
        添加子查询.

        Args:
            query: 子查询节点
            clause: 子句类型

        Returns:
            self，支持链式调用
        """
        clause = BoolClause(clause)
        if clause is BoolClause.SHOULD:
            self._params.setdefault("minimum_should_match", 1)
        self._clauses.setdefault(clause, []).append(query)
        return self

    def set_param(self, name: str, value: Any) -> BoolQuery:
        """设置额外参数，如 minimum_should_match、boost."""
        self._params[name] = value
        return self

    def is_empty(self) -> bool:
        """是否没有任何子查询."""
        return not any(self._clauses.values())

    def __bool__(self) -> bool:
        return not self.is_empty()

    def payload(self) -> Document:
        output: Document = {}
        for clause, queries in self._clauses.items():
            if queries:
                output[clause.value] = [query.to_dict() for query in queries]
        return self._merge(output)


class BoostingQuery(Query):
    """
    boosting 查询，降低匹配 negative 查询的文档得分.

    Args:
        positive: 必须匹配的查询
        negative: 用于降低得分的查询
        negative_boost: 降权系数，取值 0 ~ 1.0

    Raises:
        InvalidQueryError: positive 或 negative 为 None 时抛出
    """

    type_tag = "boosting"

    def __init__(self, positive: Query, negative: Query, negative_boost: float, **params: Any):
        if positive is None or negative is None:
            raise InvalidQueryError("boosting 查询必须同时提供 positive 和 negative 查询")
        super().__init__(**params)
        self.positive = positive
        self.negative = negative
        self.negative_boost = negative_boost

    def payload(self) -> Document:
        return self._merge(
            {
                "positive": self.positive.to_dict(),
                "negative": self.negative.to_dict(),
                "negative_boost": self.negative_boost,
            }
        )
