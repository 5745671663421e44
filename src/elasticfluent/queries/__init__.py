"""查询节点模块导出."""

from elasticfluent.queries.base import FieldValueQuery, Query
from elasticfluent.queries.compound import BoolQuery, BoostingQuery
from elasticfluent.queries.dsl import DslQuery
from elasticfluent.queries.full_text import MatchQuery
from elasticfluent.queries.joining import NestedQuery
from elasticfluent.queries.term_level import (
    ExistsQuery,
    RangeQuery,
    TermQuery,
    TermsQuery,
    WildcardQuery,
)

__all__ = [
    # 基类
    "Query",
    "FieldValueQuery",
    # 复合查询
    "BoolQuery",
    "BoostingQuery",
    # Term 级别查询
    "TermQuery",
    "TermsQuery",
    "RangeQuery",
    "ExistsQuery",
    "WildcardQuery",
    # 全文查询
    "MatchQuery",
    # 关联查询
    "NestedQuery",
    # elasticsearch.dsl 适配
    "DslQuery",
]
