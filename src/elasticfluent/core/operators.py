"""elasticfluent 操作符定义模块."""

from enum import Enum


class BoolClause(str, Enum):
    """bool 查询的子句类型."""

    MUST = "must"  # 与 AND 等价
    MUST_NOT = "must_not"  # 与 NOT 等价
    SHOULD = "should"  # 与 OR 等价
    FILTER = "filter"


class SortDirection(str, Enum):
    """排序方向."""

    ASC = "asc"
    DESC = "desc"


class WhereOperator(str, Enum):
    """where 支持的操作符."""

    EQUAL = "="
    GT = ">"
    GTE = ">="
    LT = "<"
    LTE = "<="
    NOT_EQUAL = "!="
    NOT_EQUAL_ALT = "<>"
    TERM = "term"
    MATCH = "match"
    RANGE = "range"
    WILDCARD = "wildcard"
    LIKE = "like"
