"""构建器模块导出."""

from elasticfluent.builders.search import SearchBuilder

__all__ = [
    "SearchBuilder",
]
