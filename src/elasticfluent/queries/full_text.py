"""全文查询节点."""

from elasticfluent.queries.base import FieldValueQuery


class MatchQuery(FieldValueQuery):
    """分词匹配查询: {"match": {field: query}}.

    带额外参数时输出 {"match": {field: {"query": query, "operator": "and", ...}}}.
    """

    type_tag = "match"
    value_key = "query"
