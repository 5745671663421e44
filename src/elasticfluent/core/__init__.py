"""核心模块导出."""

from elasticfluent.core.constants import (
    NEGATION_OPERATORS,
    RANGE_OPERATORS,
    RECOGNIZED_OPERATORS,
    SEARCH_PARAMS,
)
from elasticfluent.core.fields import FieldMapper, QueryField
from elasticfluent.core.operators import BoolClause, SortDirection, WhereOperator

__all__ = [
    "RECOGNIZED_OPERATORS",
    "NEGATION_OPERATORS",
    "RANGE_OPERATORS",
    "SEARCH_PARAMS",
    "BoolClause",
    "SortDirection",
    "WhereOperator",
    "QueryField",
    "FieldMapper",
]
