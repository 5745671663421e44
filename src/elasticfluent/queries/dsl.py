"""elasticsearch.dsl 查询对象适配."""

from __future__ import annotations

from elasticsearch.dsl.query import Query as ElasticsearchQuery

from elasticfluent.queries.base import Query
from elasticfluent.typing import Document


class DslQuery(Query):
    """
    将 elasticsearch.dsl 的 Q 对象包装为查询节点.

    使用示例:
        from elasticsearch.dsl import Q

        builder.where(Q("multi_match", query="python", fields=["title", "body"]))
    """

    def __init__(self, query: ElasticsearchQuery):
        super().__init__()
        self._query = query

    @property
    def type_tag(self) -> str:  # type: ignore[override]
        return self._query.name

    def payload(self) -> Document:
        return self._query.to_dict()[self.type_tag]
