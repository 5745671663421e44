"""查询节点基类模块."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from elasticfluent.typing import Document


class Query(ABC):
    """
    查询节点抽象基类.

    每个查询节点只需要声明 type_tag 并实现 payload()，
    序列化格式统一为 {type_tag: payload()}，bool 查询、端点和构建器
    只依赖 to_dict()，新增节点类型不需要修改任何调用方.

    额外参数（boost、_name 等）通过关键字参数传入，由子类决定合并位置.
    """

    type_tag: str = ""

    def __init__(self, **params: Any):
        self._params: dict[str, Any] = dict(params)

    @property
    def params(self) -> dict[str, Any]:
        """额外参数的副本."""
        return dict(self._params)

    @abstractmethod
    def payload(self) -> Document:
        """
        返回节点的值部分.

        Returns:
            不含 type_tag 的查询体
        """
        pass

    def to_dict(self) -> Document:
        """序列化为 {type_tag: payload} 格式."""
        return {self.type_tag: self.payload()}

    def _merge(self, output: Document) -> Document:
        """将额外参数合并到同一层级."""
        return {**output, **self._params}

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Query):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self) -> str:
        return f"<{type(self).__name__}: {self.to_dict()!r}>"


class FieldValueQuery(Query):
    """单字段单值查询基类.

    无额外参数时输出简写形式 {field: value}，
    有额外参数时输出 {field: {value_key: value, **params}}.
    """

    value_key: str = "value"

    def __init__(self, field: str, value: Any, **params: Any):
        super().__init__(**params)
        self.field = field
        self.value = value

    def payload(self) -> Document:
        if not self._params:
            return {self.field: self.value}
        return {self.field: self._merge({self.value_key: self.value})}
