"""关联查询节点."""

from __future__ import annotations

from typing import Any

from elasticfluent.exceptions import InvalidQueryError
from elasticfluent.queries.base import Query
from elasticfluent.typing import Document

VALID_SCORE_MODES = ("avg", "max", "min", "sum", "none")


class NestedQuery(Query):
    """
    nested 查询，用于查询 nested 类型字段中的子文档.

    Args:
        path: nested 字段路径，如 "comments"
        query: 作用于子文档的查询
        score_mode: 子文档评分聚合方式 (avg, max, min, sum, none)
        inner_hits: 内部命中配置，如 {"size": 3}
    """

    type_tag = "nested"

    def __init__(
        self,
        path: str,
        query: Query,
        score_mode: str | None = None,
        inner_hits: dict | None = None,
        **params: Any,
    ):
        if not path or not path.strip():
            raise InvalidQueryError("nested 查询的 path 不能为空")
        if score_mode is not None and score_mode not in VALID_SCORE_MODES:
            raise InvalidQueryError(
                f"Invalid score_mode: {score_mode}, must be one of {VALID_SCORE_MODES}"
            )
        super().__init__(**params)
        self.path = path
        self.query = query
        self.score_mode = score_mode
        self.inner_hits = inner_hits

    def payload(self) -> Document:
        output: Document = {"path": self.path, "query": self.query.to_dict()}
        if self.score_mode is not None:
            output["score_mode"] = self.score_mode
        if self.inner_hits is not None:
            output["inner_hits"] = self.inner_hits
        return self._merge(output)
