"""查询节点单元测试."""

import pytest
from elasticsearch.dsl import Q

from elasticfluent.core.operators import BoolClause
from elasticfluent.exceptions import InvalidQueryError
from elasticfluent.queries import (
    BoolQuery,
    BoostingQuery,
    DslQuery,
    ExistsQuery,
    MatchQuery,
    NestedQuery,
    Query,
    RangeQuery,
    TermQuery,
    TermsQuery,
    WildcardQuery,
)


class TestTermLevelQueries:
    """Term 级别查询测试."""

    def test_term_query(self) -> None:
        """测试 term 查询简写形式."""
        assert TermQuery("status", "active").to_dict() == {"term": {"status": "active"}}

    def test_term_query_with_params(self) -> None:
        """测试带 boost 的 term 查询展开为 value 形式."""
        query = TermQuery("status", "active", boost=2.0)
        assert query.to_dict() == {"term": {"status": {"value": "active", "boost": 2.0}}}

    def test_terms_query(self) -> None:
        """测试 terms 查询接收任意可迭代对象."""
        query = TermsQuery("id", (i for i in [1, 2, 3]))
        assert query.to_dict() == {"terms": {"id": [1, 2, 3]}}

    def test_terms_query_params_same_level(self) -> None:
        """测试 terms 查询的额外参数与字段同级."""
        query = TermsQuery("id", [1], boost=1.5)
        assert query.payload() == {"id": [1], "boost": 1.5}

    def test_range_query(self) -> None:
        """测试 range 查询."""
        query = RangeQuery("age", gt=18, lte=60)
        assert query.to_dict() == {"range": {"age": {"gt": 18, "lte": 60}}}

    def test_range_between_is_inclusive(self) -> None:
        """测试 between 生成闭区间."""
        query = RangeQuery.between("price", 10, 20)
        assert query.to_dict() == {"range": {"price": {"gte": 10, "lte": 20}}}

    def test_exists_query(self) -> None:
        """测试 exists 查询."""
        assert ExistsQuery("deleted_at").to_dict() == {"exists": {"field": "deleted_at"}}

    def test_wildcard_query(self) -> None:
        """测试通配符查询."""
        assert WildcardQuery("name", "jo*").to_dict() == {"wildcard": {"name": "jo*"}}


class TestFullTextQueries:
    """全文查询测试."""

    def test_match_query(self) -> None:
        """测试 match 查询简写形式."""
        assert MatchQuery("title", "python").to_dict() == {"match": {"title": "python"}}

    def test_match_query_with_params(self) -> None:
        """测试带参数的 match 查询使用 query 键."""
        query = MatchQuery("title", "python es", operator="and")
        assert query.to_dict() == {
            "match": {"title": {"query": "python es", "operator": "and"}}
        }


class TestBoolQuery:
    """bool 查询测试."""

    def test_empty(self) -> None:
        """测试空 bool 查询."""
        query = BoolQuery()
        assert query.is_empty()
        assert not query
        assert query.to_dict() == {"bool": {}}

    def test_add_query_keeps_insertion_order(self) -> None:
        """测试同一子句下保持添加顺序."""
        query = BoolQuery()
        query.add_query(TermQuery("a", 1), BoolClause.MUST)
        query.add_query(TermQuery("b", 2), "must")

        assert query.to_dict() == {
            "bool": {"must": [{"term": {"a": 1}}, {"term": {"b": 2}}]}
        }

    def test_should_sets_minimum_should_match(self) -> None:
        """测试添加 should 时自动设置 minimum_should_match 为 1."""
        query = BoolQuery()
        query.add_query(TermQuery("a", 1), BoolClause.SHOULD)
        query.add_query(TermQuery("b", 2), BoolClause.SHOULD)

        assert query.payload()["minimum_should_match"] == 1
        assert len(query.payload()["should"]) == 2

    def test_should_keeps_explicit_minimum_should_match(self) -> None:
        """测试已设置的 minimum_should_match 不会被覆盖."""
        query = BoolQuery(minimum_should_match=2)
        query.add_query(TermQuery("a", 1), BoolClause.SHOULD)
        assert query.payload()["minimum_should_match"] == 2

        query = BoolQuery().set_param("minimum_should_match", "50%")
        query.add_query(TermQuery("a", 1), BoolClause.SHOULD)
        assert query.payload()["minimum_should_match"] == "50%"

    def test_must_does_not_set_minimum_should_match(self) -> None:
        """测试非 should 子句不设置 minimum_should_match."""
        query = BoolQuery()
        query.add_query(TermQuery("a", 1), BoolClause.FILTER)
        assert "minimum_should_match" not in query.payload()

    def test_params_returns_copy(self) -> None:
        """测试 params 返回额外参数的副本."""
        query = BoolQuery(boost=2.0)
        query.add_query(TermQuery("a", 1), BoolClause.SHOULD)

        params = query.params
        params["boost"] = 5.0

        assert params is not query.params
        assert query.params == {"boost": 2.0, "minimum_should_match": 1}

    def test_invalid_clause_raises(self) -> None:
        """测试非法子句名抛出 ValueError."""
        with pytest.raises(ValueError):
            BoolQuery().add_query(TermQuery("a", 1), "maybe")

    def test_nested_bool(self) -> None:
        """测试 bool 查询嵌套."""
        inner = BoolQuery()
        inner.add_query(TermQuery("a", 1), BoolClause.SHOULD)
        outer = BoolQuery()
        outer.add_query(inner, BoolClause.MUST_NOT)

        assert outer.to_dict() == {
            "bool": {
                "must_not": [
                    {"bool": {"should": [{"term": {"a": 1}}], "minimum_should_match": 1}}
                ]
            }
        }


class TestBoostingQuery:
    """boosting 查询测试."""

    def test_to_dict(self) -> None:
        """测试 boosting 查询输出."""
        query = BoostingQuery(
            positive=MatchQuery("title", "apple"),
            negative=TermQuery("category", "fruit"),
            negative_boost=0.5,
        )
        assert query.to_dict() == {
            "boosting": {
                "positive": {"match": {"title": "apple"}},
                "negative": {"term": {"category": "fruit"}},
                "negative_boost": 0.5,
            }
        }

    def test_missing_child_raises(self) -> None:
        """测试缺少 positive 或 negative 时抛出异常."""
        with pytest.raises(InvalidQueryError, match="positive 和 negative"):
            BoostingQuery(TermQuery("a", 1), None, 0.5)  # type: ignore[arg-type]
        with pytest.raises(InvalidQueryError):
            BoostingQuery(None, TermQuery("a", 1), 0.5)  # type: ignore[arg-type]


class TestNestedQuery:
    """nested 查询测试."""

    def test_to_dict(self) -> None:
        """测试 nested 查询输出."""
        query = NestedQuery("comments", TermQuery("comments.author", "bob"), score_mode="max")
        assert query.to_dict() == {
            "nested": {
                "path": "comments",
                "query": {"term": {"comments.author": "bob"}},
                "score_mode": "max",
            }
        }

    def test_inner_hits(self) -> None:
        """测试 inner_hits 参数."""
        query = NestedQuery("comments", ExistsQuery("comments.id"), inner_hits={"size": 3})
        assert query.payload()["inner_hits"] == {"size": 3}

    def test_empty_path_raises(self) -> None:
        """测试 path 为空时抛出异常."""
        with pytest.raises(InvalidQueryError, match="path"):
            NestedQuery("  ", TermQuery("a", 1))

    def test_invalid_score_mode_raises(self) -> None:
        """测试非法 score_mode 抛出异常."""
        with pytest.raises(InvalidQueryError, match="score_mode"):
            NestedQuery("comments", TermQuery("a", 1), score_mode="median")


class TestDslQuery:
    """elasticsearch.dsl 查询适配测试."""

    def test_wraps_q_object(self) -> None:
        """测试包装 Q 对象."""
        query = DslQuery(Q("multi_match", query="python", fields=["title", "body"]))

        assert query.type_tag == "multi_match"
        assert query.to_dict() == {
            "multi_match": {"query": "python", "fields": ["title", "body"]}
        }

    def test_inside_bool_query(self) -> None:
        """测试作为 bool 子查询."""
        query = BoolQuery()
        query.add_query(DslQuery(Q("match_all")), BoolClause.MUST)
        assert query.to_dict() == {"bool": {"must": [{"match_all": {}}]}}


class TestCustomQuery:
    """自定义查询节点测试."""

    def test_new_variant_works_in_bool_query(self) -> None:
        """测试新增查询类型无需修改 bool 查询."""

        class PrefixQuery(Query):
            type_tag = "prefix"

            def __init__(self, field: str, value: str):
                super().__init__()
                self.field = field
                self.value = value

            def payload(self) -> dict:
                return {self.field: self.value}

        query = BoolQuery()
        query.add_query(PrefixQuery("name", "jo"), BoolClause.FILTER)
        assert query.to_dict() == {"bool": {"filter": [{"prefix": {"name": "jo"}}]}}

    def test_equality_by_serialized_form(self) -> None:
        """测试查询节点按序列化结果比较."""
        assert TermQuery("a", 1) == TermQuery("a", 1)
        assert TermQuery("a", 1) != TermQuery("a", 2)
