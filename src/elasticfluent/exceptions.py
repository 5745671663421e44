"""elasticfluent 异常定义模块."""


class ElasticFluentError(Exception):
    """elasticfluent 基础异常类."""

    pass


class InvalidClauseError(ElasticFluentError):
    """非法的操作符与查询值组合异常.

    当查询值为 None 且操作符是可识别的操作符时抛出，
    例如 where("status", "=", None)。
    """

    pass


class InvalidSortDirectionError(ElasticFluentError):
    """排序方向非法异常（只允许 asc / desc）."""

    pass


class InvalidQueryError(ElasticFluentError):
    """查询节点构造参数非法异常."""

    pass
