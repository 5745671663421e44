"""Search 请求构建器模块."""

from __future__ import annotations

import copy
import logging
from collections.abc import Callable, Iterable, Mapping
from typing import Any

from elasticsearch.dsl import Search
from elasticsearch.dsl.query import Query as ElasticsearchQuery
from elasticsearch.dsl.response import Response

from elasticfluent.aggregations import Aggregation
from elasticfluent.core.constants import NEGATION_OPERATORS, RECOGNIZED_OPERATORS, SEARCH_PARAMS
from elasticfluent.core.fields import FieldMapper
from elasticfluent.core.operators import BoolClause, SortDirection, WhereOperator
from elasticfluent.endpoints import (
    AggregationEndpoint,
    Endpoint,
    HighlightEndpoint,
    QueryEndpoint,
    SortEndpoint,
)
from elasticfluent.exceptions import InvalidClauseError, InvalidQueryError, InvalidSortDirectionError
from elasticfluent.queries import BoolQuery, DslQuery, NestedQuery, Query
from elasticfluent.sorts import Sort
from elasticfluent.typing import Document, RangeList

# 模块级别日志记录器
logger = logging.getLogger(__name__)

# 区分"未传参"与"传入 None"
_MISSING: Any = object()


class SearchBuilder:
    """
    ES Search 请求构建器.

    以链式调用累积查询、排序、聚合、高亮和请求参数，最终通过
    to_search_params() 生成可直接交给客户端的请求字典:
    - where / or_where / where_in / where_between 等: bool 查询 (query)
    - order_by: 排序 (sort)
    - aggregation / stats / range 等: 聚合 (aggs)
    - highlight: 高亮 (highlight)
    - select / offset / limit 等: 顶层请求参数

    使用示例:
        builder = SearchBuilder(index="articles")

        params = (
            builder
            .where("status", "active")
            .where("views", ">=", 100)
            .or_where("author", "alice")
            .where_in("tag", ["python", "es"])
            .order_by("create_time", "desc")
            .limit(20)
            .to_search_params()
        )

        # {"index": "articles", "size": 20, "body": {"query": {"bool": {...}}, "sort": [...]}}
    """

    def __init__(
        self,
        index: str | None = None,
        field_mapper: FieldMapper | None = None,
        search_factory: Callable[[], Search] | None = None,
    ):
        """
        初始化构建器.

        Args:
            index: 索引名称
            field_mapper: 字段映射器，将调用方字段名转换为 ES 字段名
            search_factory: Search 对象工厂函数，to_search() 以其结果为基础
        """
        self._field_mapper = field_mapper or FieldMapper()
        self._search_factory = search_factory or Search

        self.query_endpoint = QueryEndpoint()
        self.sort_endpoint = SortEndpoint()
        self.aggregation_endpoint = AggregationEndpoint()
        self.highlight_endpoint = HighlightEndpoint()

        # 请求参数，None 表示未设置
        self._index: str | None = index
        self._columns: list[str] | None = None
        self._offset: int | None = None
        self._limit: int | None = None
        self._stored_fields: list[str] | None = None
        self._script_fields: Document | None = None
        self._explain: bool | None = None
        self._version: bool | None = None
        self._indices_boost: list[Document] | None = None
        self._min_score: float | None = None
        self._search_after: list[Any] | None = None
        self._track_total_hits: bool | int | None = None

    # ========== 请求参数 ==========

    def set_index(self, index: str) -> SearchBuilder:
        """设置索引名称."""
        self._index = index
        return self

    def select(self, columns: Iterable[str] | None = None) -> SearchBuilder:
        """
        设置返回字段 (_source).

        Args:
            columns: 字段列表

        Returns:
            self，支持链式调用
        """
        self._columns = self._field_mapper.get_es_fields(columns or [])
        return self

    def add_select(self, columns: Iterable[str]) -> SearchBuilder:
        """追加返回字段."""
        self._columns = (self._columns or []) + self._field_mapper.get_es_fields(columns)
        return self

    def offset(self, offset: int) -> SearchBuilder:
        """设置跳过的文档数 (from)."""
        self._offset = offset
        return self

    def limit(self, limit: int) -> SearchBuilder:
        """设置返回的文档数 (size)，设为 0 时只返回聚合结果."""
        self._limit = limit
        return self

    def stored_fields(self, fields: list[str]) -> SearchBuilder:
        self._stored_fields = list(fields)
        return self

    def script_fields(self, fields: Document) -> SearchBuilder:
        self._script_fields = dict(fields)
        return self

    def explain(self, explain: bool = True) -> SearchBuilder:
        self._explain = explain
        return self

    def version(self, version: bool = True) -> SearchBuilder:
        self._version = version
        return self

    def indices_boost(self, boosts: list[Document]) -> SearchBuilder:
        self._indices_boost = list(boosts)
        return self

    def min_score(self, score: float) -> SearchBuilder:
        self._min_score = score
        return self

    def search_after(self, values: list[Any]) -> SearchBuilder:
        self._search_after = list(values)
        return self

    def track_total_hits(self, track: bool | int = True) -> SearchBuilder:
        self._track_total_hits = track
        return self

    # ========== 查询条件 ==========

    def where(
        self,
        column: Any,
        operator: Any = _MISSING,
        value: Any = _MISSING,
        clause: BoolClause | str = BoolClause.MUST,
    ) -> SearchBuilder:
        """
        添加查询条件.

        支持的调用方式:
            where("status", "active")              # 等价于 where("status", "=", "active")
            where("views", ">=", 100)
            where("status", "!=", "deleted")       # 放入 must_not
            where("deleted_at", None)              # 字段为空
            where({"status": "active", "type": "post"})  # 隐式嵌套 bool
            where([("views", ">", 10), ("tag", "es")])
            where(lambda q: q.where("a", 1).or_where("b", 2))
            where(TermQuery("status", "active"))   # 直接添加查询节点
            where(Q("match", title="python"))      # elasticsearch.dsl 查询对象

        Args:
            column: 字段名、条件字典/列表、查询节点或接收子构建器的函数
            operator: 操作符，只传两个参数时作为查询值
            value: 查询值
            clause: 子句类型，默认 must

        Returns:
            self，支持链式调用

        Raises:
            InvalidClauseError: 查询值为 None 且操作符为可识别的操作符时抛出
        """
        clause = BoolClause(clause)

        if isinstance(column, (Mapping, list, tuple)):
            return self._add_array_of_wheres(column, clause)

        if isinstance(column, ElasticsearchQuery):
            column = DslQuery(column)
        if isinstance(column, Query):
            self.query_endpoint.add_to_bool_query(column, clause)
            return self

        # 预处理操作符和查询值
        value, operator = self._prepare_value_and_operator(
            value, operator, use_default=operator is not _MISSING and value is _MISSING
        )

        if callable(column) and operator is None:
            return self.where_bool(column, clause)

        if self._is_invalid_operator(operator):
            # 未识别的操作符视为查询值: where(column, value)
            if value is not None:
                logger.warning(
                    f"Unknown operator '{operator}' for column '{column}', "
                    f"treating it as value and discarding {value!r}"
                )
            value, operator = operator, WhereOperator.EQUAL.value

        operator = operator.lower()
        if value is None:
            if operator == WhereOperator.EQUAL:
                return self.where_null([column])
            return self.where_not_null([column])

        if operator in NEGATION_OPERATORS:
            clause = BoolClause.MUST_NOT

        self.query_endpoint.add_operator_query(
            self._get_es_field(str(column)), operator, value, clause
        )
        return self

    def must(self, column: Any, operator: Any = _MISSING, value: Any = _MISSING) -> SearchBuilder:
        """添加 must 条件，同 where."""
        return self.where(column, operator, value, BoolClause.MUST)

    def filter(self, column: Any, operator: Any = _MISSING, value: Any = _MISSING) -> SearchBuilder:
        """添加 filter 条件（不参与评分）."""
        return self.where(column, operator, value, BoolClause.FILTER)

    def or_where(self, column: Any, operator: Any = _MISSING, value: Any = _MISSING) -> SearchBuilder:
        """添加 should 条件."""
        return self.where(column, operator, value, BoolClause.SHOULD)

    def should(self, column: Any, operator: Any = _MISSING, value: Any = _MISSING) -> SearchBuilder:
        """添加 should 条件，同 or_where."""
        return self.or_where(column, operator, value)

    def term(self, column: str, value: Any, clause: BoolClause | str = BoolClause.MUST) -> SearchBuilder:
        """添加 term 精确查询."""
        return self.where(column, WhereOperator.TERM.value, value, clause)

    def match(self, column: str, query: Any, clause: BoolClause | str = BoolClause.MUST) -> SearchBuilder:
        """添加 match 全文查询."""
        return self.where(column, WhereOperator.MATCH.value, query, clause)

    def where_in(self, column: str, values: Iterable[Any]) -> SearchBuilder:
        """字段值在 values 中 (terms, must)."""
        self.query_endpoint.add_terms_query(self._get_es_field(column), list(values), BoolClause.MUST)
        return self

    def where_not_in(self, column: str, values: Iterable[Any]) -> SearchBuilder:
        """字段值不在 values 中 (terms, must_not)."""
        self.query_endpoint.add_terms_query(
            self._get_es_field(column), list(values), BoolClause.MUST_NOT
        )
        return self

    def where_null(self, columns: str | Iterable[str], negate: bool = False) -> SearchBuilder:
        """
        字段为空（不存在）.

        通过子句位置表达取反: 为空时 exists 放入 must_not，
        negate=True（不为空）时放入 must.

        Args:
            columns: 字段名或字段名列表
            negate: 是否取反
        """
        clause = BoolClause.MUST if negate else BoolClause.MUST_NOT
        if isinstance(columns, str):
            columns = [columns]
        for column in columns:
            self.query_endpoint.add_exists_query(self._get_es_field(column), clause)
        return self

    def where_not_null(self, columns: str | Iterable[str]) -> SearchBuilder:
        """字段不为空（存在）."""
        return self.where_null(columns, negate=True)

    def where_between(
        self,
        column: str,
        min_value: Any,
        max_value: Any,
        clause: BoolClause | str = BoolClause.MUST,
    ) -> SearchBuilder:
        """字段值在闭区间 [min_value, max_value] 内."""
        self.query_endpoint.add_between_query(
            self._get_es_field(column), min_value, max_value, clause
        )
        return self

    def should_between(self, column: str, min_value: Any, max_value: Any) -> SearchBuilder:
        return self.where_between(column, min_value, max_value, BoolClause.SHOULD)

    def where_not_between(self, column: str, min_value: Any, max_value: Any) -> SearchBuilder:
        return self.where_between(column, min_value, max_value, BoolClause.MUST_NOT)

    def where_bool(
        self,
        callback: Callable[[SearchBuilder], Any],
        clause: BoolClause | str = BoolClause.MUST,
    ) -> SearchBuilder:
        """
        添加嵌套 bool 条件组.

        callback 接收一个新的子构建器，子构建器中的全部条件作为一个
        bool 查询节点加入当前构建器的 clause 子句.

        示例:
            # status = active AND (tag = python OR tag = es)
            builder.where("status", "active").where_bool(
                lambda q: q.or_where("tag", "python").or_where("tag", "es")
            )
        """
        query = self.new_builder()
        query.query_endpoint.set_relation(self.query_endpoint.relation)
        callback(query)
        return self.add_to_bool_where_query(query, clause)

    def where_has(
        self,
        relation: str,
        callback: Callable[[SearchBuilder], Any],
        nested: bool = False,
        score_mode: str | None = None,
    ) -> SearchBuilder:
        """
        在关联对象的字段上添加条件.

        子构建器中的字段名都会加上 "relation." 前缀.
        nested=False 时子构建器的条件按子句逐个并入当前 bool 查询；
        nested=True 时整体包装为 nested 查询放入 must.
        逐子句并入时，子构建器设置的 minimum_should_match 等参数
        在当前 bool 查询未设置同名参数时被继承.

        Args:
            relation: 关联字段名（nested=True 时即 nested path）
            callback: 接收子构建器的函数
            nested: 是否包装为 nested 查询
            score_mode: nested 查询的评分模式，只能与 nested=True 同时使用

        Raises:
            InvalidQueryError: nested=False 时传入 score_mode

        示例:
            builder.where_has("author", lambda q: q.where("name", "alice"))
            # {"term": {"author.name": "alice"}}
        """
        if score_mode is not None and not nested:
            raise InvalidQueryError("score_mode 只适用于 nested 查询")

        path = self.query_endpoint.resolve_field(relation)
        query = self.new_builder()
        query.query_endpoint.set_relation(path)
        callback(query)

        bool_query = query.get_bool_query()
        if bool_query.is_empty():
            return self

        if nested:
            logger.debug(f"Folding relation '{path}' as nested query")
            self.query_endpoint.add_to_bool_query(
                NestedQuery(path, bool_query, score_mode=score_mode), BoolClause.MUST
            )
            return self

        logger.debug(f"Folding relation '{path}' clauses into parent bool query")
        # 子查询的额外参数只在当前 bool 查询未设置时继承
        parent_params = self.query_endpoint.bool_query.params
        for name, value in bool_query.params.items():
            if name not in parent_params:
                self.query_endpoint.bool_query.set_param(name, value)
        for clause, queries in bool_query.clauses.items():
            for where in queries:
                self.query_endpoint.add_to_bool_query(where, clause)
        return self

    def add_to_bool_where_query(
        self, query: SearchBuilder, clause: BoolClause | str = BoolClause.MUST
    ) -> SearchBuilder:
        """将子构建器的 bool 查询作为一个节点并入当前构建器（为空时忽略）."""
        bool_query = query.get_bool_query()
        if bool_query:
            self.query_endpoint.add_to_bool_query(bool_query, clause)
        return self

    def add_to_bool_query(self, query: Query, clause: BoolClause | str = BoolClause.MUST) -> SearchBuilder:
        """直接添加查询节点."""
        self.query_endpoint.add_to_bool_query(query, clause)
        return self

    def get_bool_query(self) -> BoolQuery:
        """当前构建器的根 bool 查询."""
        return self.query_endpoint.bool_query

    def get_bool_query_wheres(self) -> dict[BoolClause, list[Query]]:
        """根 bool 查询中各子句下的查询节点."""
        return self.query_endpoint.bool_query.clauses

    # ========== 排序 / 高亮 ==========

    def order_by(
        self,
        column: str | Sort,
        direction: SortDirection | str = SortDirection.ASC,
        **params: Any,
    ) -> SearchBuilder:
        """
        添加排序.

        Args:
            column: 字段名或排序节点
            direction: 排序方向 asc / desc（不区分大小写）
            **params: 其他排序参数，如 missing="_last"

        Raises:
            InvalidSortDirectionError: 排序方向不是 asc / desc 时抛出
        """
        if isinstance(column, Sort):
            self.sort_endpoint.add_sort(column)
            return self

        if isinstance(direction, SortDirection):
            direction = direction.value
        direction = str(direction).lower()
        if direction not in (SortDirection.ASC.value, SortDirection.DESC.value):
            raise InvalidSortDirectionError('Order direction must be "asc" or "desc".')

        self.sort_endpoint.add_field_sort(
            self._get_es_field(column, for_agg=True), direction, **params
        )
        return self

    def order_by_desc(self, column: str) -> SearchBuilder:
        return self.order_by(column, SortDirection.DESC)

    def highlight(self, column: str, **params: Any) -> SearchBuilder:
        """
        添加高亮字段.

        示例:
            builder.highlight("content", fragment_size=150, number_of_fragments=3)
        """
        self.highlight_endpoint.add_field(self._get_es_field(column), params)
        return self

    def highlight_options(self, **options: Any) -> SearchBuilder:
        """设置全局高亮参数，如 pre_tags=["<em>"], post_tags=["</em>"]."""
        self.highlight_endpoint.set_options(**options)
        return self

    # ========== 聚合 ==========

    def aggregation(
        self,
        column: str | Aggregation,
        agg_type: str | None = None,
        name: str | None = None,
        **params: Any,
    ) -> SearchBuilder:
        """
        添加聚合.

        Args:
            column: 字段名或聚合节点
            agg_type: 聚合类型，如 terms、stats、avg、cardinality
            name: 聚合名称，默认为 "{column}_{agg_type}"
            **params: 其他聚合参数

        Raises:
            ValueError: 聚合类型为空或聚合名称无效时抛出

        示例:
            builder.aggregation("status", "terms", size=10)
            # {"aggs": {"status_terms": {"terms": {"field": "status", "size": 10}}}}
        """
        if isinstance(column, Aggregation):
            self.aggregation_endpoint.add_aggregation(column)
            return self

        if not agg_type:
            raise ValueError("聚合类型不能为空")
        self.aggregation_endpoint.add_field_aggregation(
            name or self._default_aggregation_name(column, agg_type),
            agg_type,
            field=self._get_es_field(column, for_agg=True),
            **params,
        )
        return self

    def aggregation_raw(self, agg_dict: Document) -> SearchBuilder:
        """
        添加原始聚合 DSL.

        示例:
            builder.aggregation_raw({
                "events_over_time": {
                    "date_histogram": {"field": "timestamp", "calendar_interval": "1d"},
                }
            })
        """
        self.aggregation_endpoint.add_raw_aggregation(agg_dict)
        return self

    def range(self, column: str, ranges: RangeList, name: str | None = None) -> SearchBuilder:
        """
        添加范围分桶聚合.

        示例:
            builder.range("price", [{"to": 100}, {"from": 100, "to": 200}, {"from": 200}])
        """
        self.aggregation_endpoint.add_range_bucket(
            name or self._default_aggregation_name(column, "range"),
            self._get_es_field(column, for_agg=True),
            ranges,
        )
        return self

    def stats(self, column: str, name: str | None = None) -> SearchBuilder:
        return self.aggregation(column, "stats", name=name)

    def sum(self, column: str, name: str | None = None) -> SearchBuilder:
        return self.aggregation(column, "sum", name=name)

    def min(self, column: str, name: str | None = None) -> SearchBuilder:
        return self.aggregation(column, "min", name=name)

    def max(self, column: str, name: str | None = None) -> SearchBuilder:
        return self.aggregation(column, "max", name=name)

    def avg(self, column: str, name: str | None = None) -> SearchBuilder:
        return self.aggregation(column, "avg", name=name)

    def terms(self, column: str, size: int = 10, name: str | None = None, **params: Any) -> SearchBuilder:
        """添加 terms 分组聚合."""
        return self.aggregation(column, "terms", name=name, size=size, **params)

    def cardinality(
        self, column: str, precision_threshold: int = 3000, name: str | None = None
    ) -> SearchBuilder:
        """添加去重计数聚合（precision_threshold 越高越精确，内存消耗越大）."""
        return self.aggregation(
            column, "cardinality", name=name, precision_threshold=precision_threshold
        )

    def percentiles(
        self, column: str, percents: list[float] | None = None, name: str | None = None
    ) -> SearchBuilder:
        """添加百分位数聚合，percents 默认使用 ES 的 [1, 5, 25, 50, 75, 95, 99]."""
        params: Document = {}
        if percents:
            params["percents"] = percents
        return self.aggregation(column, "percentiles", name=name, **params)

    # ========== 构建与执行 ==========

    def to_search_params(self) -> Document:
        """
        生成请求参数字典.

        已设置的请求参数按 ES 参数名输出，各端点的非空结果放入 "body".

        Returns:
            形如 {"index": ..., "from": ..., "size": ..., "body": {"query": ..., "sort": ...}}
        """
        result: Document = {}
        for field, param in SEARCH_PARAMS.items():
            value = getattr(self, f"_{field}")
            if self._is_set(value):
                result[param] = copy.deepcopy(value)

        endpoints: list[Endpoint] = [
            self.query_endpoint,
            self.sort_endpoint,
            self.highlight_endpoint,
            self.aggregation_endpoint,
        ]
        for endpoint in endpoints:
            output = endpoint.normalize()
            if output:
                result.setdefault("body", {})[endpoint.name] = output

        logger.debug(f"Compiled search params: {result}")
        return result

    def to_search(self, using: Any = None) -> Search:
        """
        构建 elasticsearch.dsl 的 Search 对象.

        Args:
            using: Elasticsearch 客户端或连接别名

        Returns:
            elasticsearch.dsl.Search 对象
        """
        params = self.to_search_params()
        index = params.pop("index", None)
        body = params.pop("body", {})

        search = self._search_factory()
        if using is not None:
            search = search.using(using)
        if index:
            search = search.index(index)
        search.update_from_dict({**params, **body})
        return search

    def get(self, using: Any = None) -> Response:
        """
        执行搜索.

        Args:
            using: Elasticsearch 客户端或连接别名

        Returns:
            elasticsearch.dsl.Response 原始响应对象
        """
        search = self.to_search(using)
        logger.info(f"Executing search on index: {self._index}")
        return search.execute()

    def first(self, using: Any = None) -> Response:
        """只取第一条文档执行搜索."""
        return self.limit(1).get(using)

    def new_builder(self) -> SearchBuilder:
        """创建共享字段映射的新构建器（不共享任何查询状态）."""
        return type(self)(field_mapper=self._field_mapper, search_factory=self._search_factory)

    def to_dict(self) -> Document:
        """导出为字典格式的 DSL（同 to_search_params）."""
        return self.to_search_params()

    # ========== 内部方法 ==========

    def _add_array_of_wheres(self, column: Mapping | list | tuple, clause: BoolClause) -> SearchBuilder:
        """
        将条件字典/列表作为一个嵌套 bool 条件组添加.

        列表元素只能是参数序列、查询节点或回调函数，其他元素抛出 InvalidClauseError.
        """

        def add_wheres(query: SearchBuilder) -> None:
            if isinstance(column, Mapping):
                for key, value in column.items():
                    if isinstance(key, int) and isinstance(value, (list, tuple)):
                        query.where(*value)
                    else:
                        query.where(key, WhereOperator.EQUAL.value, value, clause)
                return

            for item in column:
                if isinstance(item, (list, tuple)):
                    query.where(*item)
                elif isinstance(item, (Query, ElasticsearchQuery)) or callable(item):
                    query.where(item)
                else:
                    raise InvalidClauseError(
                        f"Condition list items must be sequences, queries or callables, got {item!r}."
                    )

        return self.where_bool(add_wheres, clause)

    def _prepare_value_and_operator(
        self, value: Any, operator: Any, use_default: bool = False
    ) -> tuple[Any, Any]:
        """
        预处理查询值和操作符.

        Args:
            value: 查询值
            operator: 操作符
            use_default: 是否为 where(column, value) 两参数形式

        Raises:
            InvalidClauseError: 查询值为 None 且操作符为可识别的操作符时抛出
        """
        if use_default:
            return operator, WhereOperator.EQUAL.value

        value = None if value is _MISSING else value
        operator = None if operator is _MISSING else operator
        if value is None and not self._is_invalid_operator(operator):
            raise InvalidClauseError("Illegal operator and value combination.")
        return value, operator

    @staticmethod
    def _is_invalid_operator(operator: Any) -> bool:
        """操作符是否不可识别（大小写不敏感）."""
        return not (isinstance(operator, str) and operator.lower() in RECOGNIZED_OPERATORS)

    @staticmethod
    def _is_set(value: Any) -> bool:
        if value is None:
            return False
        if isinstance(value, (list, tuple, dict)) and not value:
            return False
        return True

    @staticmethod
    def _default_aggregation_name(column: str, agg_type: str) -> str:
        return f"{column}_{agg_type}".replace(".", "_")

    def _get_es_field(self, column: str, for_agg: bool = False) -> str:
        return self._field_mapper.get_es_field(column, for_agg=for_agg)
