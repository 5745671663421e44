"""端点基类模块."""

from abc import ABC, abstractmethod

from elasticfluent.typing import NormalizedType


class Endpoint(ABC):
    """
    请求体端点抽象基类.

    每个端点持有一份独立的累积状态，normalize() 将其转换为请求体中
    name 对应的部分，没有内容时返回 None，由构建器省略该键.
    """

    name: str = ""

    @abstractmethod
    def normalize(self) -> NormalizedType:
        """转换为请求体片段，为空时返回 None."""
        pass
