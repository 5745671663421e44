"""字段映射模块."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass


@dataclass
class QueryField:
    """查询字段配置."""

    field: str  # 调用方使用的字段名
    es_field: str  # ES 实际字段名
    es_field_for_agg: str | None = None  # 聚合/排序时使用的字段名，如 keyword 子字段
    display: str = ""  # 显示名称

    def get_es_field(self, for_agg: bool = False) -> str:
        """获取 ES 字段名."""
        if for_agg and self.es_field_for_agg:
            return self.es_field_for_agg
        return self.es_field


class FieldMapper:
    """字段映射器.

    将调用方的列名转换为索引中的实际字段名，未配置的字段原样返回.

    使用示例:
        mapper = FieldMapper([
            QueryField(field="title", es_field="title", es_field_for_agg="title.keyword"),
        ])
        mapper.get_es_field("title", for_agg=True)  # "title.keyword"
    """

    def __init__(self, fields: list[QueryField] | None = None):
        """
        初始化字段映射器.

        Args:
            fields: 字段配置列表
        """
        self._fields: dict[str, QueryField] = {f.field: f for f in (fields or [])}

    def get_es_field(self, field: str, for_agg: bool = False) -> str:
        """
        获取 ES 字段名.

        Args:
            field: 调用方字段名
            for_agg: 是否用于聚合或排序

        Returns:
            ES 字段名
        """
        if field in self._fields:
            return self._fields[field].get_es_field(for_agg)
        return field

    def get_es_fields(self, fields: Iterable[str], for_agg: bool = False) -> list[str]:
        """批量获取 ES 字段名."""
        return [self.get_es_field(field, for_agg=for_agg) for field in fields]

    def __contains__(self, field: object) -> bool:
        return field in self._fields
