"""查询端点模块."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from elasticfluent.core.constants import RANGE_OPERATORS
from elasticfluent.core.operators import BoolClause, WhereOperator
from elasticfluent.endpoints.base import Endpoint
from elasticfluent.queries import (
    BoolQuery,
    ExistsQuery,
    MatchQuery,
    Query,
    RangeQuery,
    TermQuery,
    TermsQuery,
    WildcardQuery,
)
from elasticfluent.typing import Document


class QueryEndpoint(Endpoint):
    """
    查询端点，持有根 bool 查询.

    relation 不为空时，所有字段名都会加上 "relation." 前缀，
    用于 where_has 在关联对象的字段上构建条件.
    """

    name = "query"

    def __init__(self) -> None:
        self._bool_query = BoolQuery()
        self._relation: str | None = None

    @property
    def bool_query(self) -> BoolQuery:
        return self._bool_query

    @property
    def relation(self) -> str | None:
        return self._relation

    def set_relation(self, relation: str | None) -> QueryEndpoint:
        self._relation = relation or None
        return self

    def resolve_field(self, column: str) -> str:
        """加上关联前缀后的字段名."""
        if self._relation:
            return f"{self._relation}.{column}"
        return column

    def add_to_bool_query(self, query: Query, clause: BoolClause | str = BoolClause.MUST) -> QueryEndpoint:
        self._bool_query.add_query(query, clause)
        return self

    def add_operator_query(
        self,
        column: str,
        operator: str,
        value: Any,
        clause: BoolClause | str = BoolClause.MUST,
    ) -> QueryEndpoint:
        """
        按操作符构建查询节点并添加到 bool 查询.

        Args:
            column: 字段名
            operator: 已识别的操作符（小写）
            value: 查询值
            clause: 子句类型
        """
        query = self.build_operator_query(self.resolve_field(column), operator, value)
        return self.add_to_bool_query(query, clause)

    def add_terms_query(
        self, column: str, values: Iterable[Any], clause: BoolClause | str = BoolClause.MUST
    ) -> QueryEndpoint:
        return self.add_to_bool_query(TermsQuery(self.resolve_field(column), values), clause)

    def add_exists_query(self, column: str, clause: BoolClause | str = BoolClause.MUST) -> QueryEndpoint:
        return self.add_to_bool_query(ExistsQuery(self.resolve_field(column)), clause)

    def add_between_query(
        self,
        column: str,
        min_value: Any,
        max_value: Any,
        clause: BoolClause | str = BoolClause.MUST,
    ) -> QueryEndpoint:
        query = RangeQuery.between(self.resolve_field(column), min_value, max_value)
        return self.add_to_bool_query(query, clause)

    @staticmethod
    def build_operator_query(field: str, operator: str, value: Any) -> Query:
        """
        将 (字段, 操作符, 值) 转换为查询节点.

        - = / != / <> / term: term 查询，值为列表时使用 terms 查询
        - > / >= / < / <=: range 查询
        - range: 值为字典时作为范围参数，为二元序列时作为闭区间，其他值作为 gte 下界
        - match: match 查询
        - wildcard: 通配符查询，值原样使用
        - like: 通配符查询，前后自动加 *
        """
        if operator in RANGE_OPERATORS:
            return RangeQuery(field, **{RANGE_OPERATORS[operator]: value})

        if operator == WhereOperator.RANGE:
            if isinstance(value, dict):
                return RangeQuery(field, **value)
            if isinstance(value, (list, tuple)) and len(value) == 2:
                return RangeQuery.between(field, value[0], value[1])
            # 单个值视为下界
            return RangeQuery(field, gte=value)

        if operator == WhereOperator.MATCH:
            return MatchQuery(field, value)

        if operator == WhereOperator.WILDCARD:
            return WildcardQuery(field, value)

        if operator == WhereOperator.LIKE:
            return WildcardQuery(field, f"*{str(value).strip('*')}*")

        # =, !=, <>, term
        if isinstance(value, (list, tuple, set, frozenset)):
            return TermsQuery(field, value)
        return TermQuery(field, value)

    def normalize(self) -> Document | None:
        if self._bool_query.is_empty():
            return None
        return self._bool_query.to_dict()
