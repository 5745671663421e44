"""高亮端点模块."""

from __future__ import annotations

import copy
from typing import Any

from elasticfluent.endpoints.base import Endpoint
from elasticfluent.typing import Document


class HighlightEndpoint(Endpoint):
    """高亮端点: {"fields": {field: {...}}, **options}."""

    name = "highlight"

    def __init__(self) -> None:
        self._fields: dict[str, Document] = {}
        self._options: Document = {}

    def add_field(self, field: str, params: Document | None = None) -> HighlightEndpoint:
        self._fields[field] = dict(params or {})
        return self

    def set_options(self, **options: Any) -> HighlightEndpoint:
        """设置全局高亮参数，如 pre_tags、post_tags、fragment_size."""
        self._options.update(options)
        return self

    def normalize(self) -> Document | None:
        # 只有全局参数没有字段时不输出
        if not self._fields:
            return None
        fields = {field: copy.deepcopy(params) for field, params in self._fields.items()}
        return {"fields": fields, **copy.deepcopy(self._options)}
