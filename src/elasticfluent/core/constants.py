"""elasticfluent 常量定义模块."""

from elasticfluent.core.operators import WhereOperator

# where 可识别的操作符（小写比较）
RECOGNIZED_OPERATORS: frozenset[str] = frozenset(op.value for op in WhereOperator)

# 取反操作符，结果放入 must_not
NEGATION_OPERATORS: frozenset[str] = frozenset(
    (WhereOperator.NOT_EQUAL.value, WhereOperator.NOT_EQUAL_ALT.value)
)

# 比较操作符到 range 参数的映射
RANGE_OPERATORS: dict[str, str] = {
    WhereOperator.GT.value: "gt",
    WhereOperator.GTE.value: "gte",
    WhereOperator.LT.value: "lt",
    WhereOperator.LTE.value: "lte",
}

# 构建器属性名到 ES 请求参数名的映射（顺序即输出顺序）
SEARCH_PARAMS: dict[str, str] = {
    "index": "index",
    "columns": "_source",
    "offset": "from",
    "limit": "size",
    "stored_fields": "stored_fields",
    "script_fields": "script_fields",
    "explain": "explain",
    "version": "version",
    "indices_boost": "indices_boost",
    "min_score": "min_score",
    "search_after": "search_after",
    "track_total_hits": "track_total_hits",
}

# ES 聚合名称不允许包含的字符
INVALID_AGGREGATION_NAME_CHARACTERS: dict[str, str] = {
    '"': "双引号",
    ".": "点号",
    " ": "空格",
}
