"""elasticfluent 类型定义模块."""

from typing import Any, Dict, List, Union

# 输出文档类型
Document = Dict[str, Any]

# 范围聚合区间类型
# 格式: [{"from": 0, "to": 100}, {"from": 100}]
RangeList = List[Dict[str, Any]]

# 归一化结果类型（端点为空时为 None）
NormalizedType = Union[Document, List[Document], None]
