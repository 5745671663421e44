"""elasticfluent - Elasticsearch 链式查询构建库.

以类似 ORM 查询构建器的链式调用，编译出完整的 Elasticsearch 搜索请求
（bool 查询树、排序、聚合、高亮及分页等请求参数）。

主要功能:
    - SearchBuilder: 链式构建搜索请求
    - 查询节点: TermQuery、TermsQuery、RangeQuery、BoolQuery、BoostingQuery 等
    - 端点: QueryEndpoint、SortEndpoint、AggregationEndpoint、HighlightEndpoint

使用示例:
    from elasticfluent import SearchBuilder

    builder = SearchBuilder(index="articles")
    builder.where("status", "active").or_where("status", "pending")
    params = builder.to_search_params()
"""

__version__ = "0.1.0"

# 导出聚合节点
from elasticfluent.aggregations import Aggregation, FieldAggregation, RangeAggregation

# 导出构建器
from elasticfluent.builders import SearchBuilder

# 导出核心组件
from elasticfluent.core import (
    BoolClause,
    FieldMapper,
    QueryField,
    SortDirection,
    WhereOperator,
)

# 导出端点
from elasticfluent.endpoints import (
    AggregationEndpoint,
    Endpoint,
    HighlightEndpoint,
    QueryEndpoint,
    SortEndpoint,
)

# 导出异常
from elasticfluent.exceptions import (
    ElasticFluentError,
    InvalidClauseError,
    InvalidQueryError,
    InvalidSortDirectionError,
)

# 导出查询节点
from elasticfluent.queries import (
    BoolQuery,
    BoostingQuery,
    DslQuery,
    ExistsQuery,
    MatchQuery,
    NestedQuery,
    Query,
    RangeQuery,
    TermQuery,
    TermsQuery,
    WildcardQuery,
)

# 导出排序节点
from elasticfluent.sorts import FieldSort, ScoreSort, Sort

__all__ = [
    # 版本
    "__version__",
    # 构建器
    "SearchBuilder",
    # 枚举
    "BoolClause",
    "SortDirection",
    "WhereOperator",
    # 字段映射
    "QueryField",
    "FieldMapper",
    # 查询节点
    "Query",
    "BoolQuery",
    "BoostingQuery",
    "TermQuery",
    "TermsQuery",
    "RangeQuery",
    "ExistsQuery",
    "WildcardQuery",
    "MatchQuery",
    "NestedQuery",
    "DslQuery",
    # 排序节点
    "Sort",
    "FieldSort",
    "ScoreSort",
    # 聚合节点
    "Aggregation",
    "FieldAggregation",
    "RangeAggregation",
    # 端点
    "Endpoint",
    "QueryEndpoint",
    "SortEndpoint",
    "AggregationEndpoint",
    "HighlightEndpoint",
    # 异常
    "ElasticFluentError",
    "InvalidClauseError",
    "InvalidSortDirectionError",
    "InvalidQueryError",
]
