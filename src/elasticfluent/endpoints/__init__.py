"""端点模块导出."""

from elasticfluent.endpoints.aggregation import AggregationEndpoint
from elasticfluent.endpoints.base import Endpoint
from elasticfluent.endpoints.highlight import HighlightEndpoint
from elasticfluent.endpoints.query import QueryEndpoint
from elasticfluent.endpoints.sort import SortEndpoint

__all__ = [
    "Endpoint",
    "QueryEndpoint",
    "SortEndpoint",
    "AggregationEndpoint",
    "HighlightEndpoint",
]
