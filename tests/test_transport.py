"""Search 对象构建与执行测试."""

from unittest.mock import MagicMock, patch

from elasticsearch import Elasticsearch
from elasticsearch.dsl import Search

from elasticfluent import SearchBuilder


class TestToSearch:
    """to_search 测试."""

    def test_body_and_params(self) -> None:
        """测试请求体与请求参数写入 Search 对象."""
        builder = (
            SearchBuilder(index="articles")
            .where("status", "active")
            .order_by("ts", "desc")
            .stats("price")
            .highlight("title")
            .highlight_options(pre_tags=["<em>"])
            .select(["title"])
            .offset(10)
            .limit(5)
        )
        search = builder.to_search()
        dsl = search.to_dict()

        assert search._index == ["articles"]
        assert dsl["query"] == {"bool": {"must": [{"term": {"status": "active"}}]}}
        assert dsl["sort"] == [{"ts": {"order": "desc"}}]
        assert dsl["aggs"] == {"price_stats": {"stats": {"field": "price"}}}
        assert dsl["highlight"] == {"fields": {"title": {}}, "pre_tags": ["<em>"]}
        assert dsl["_source"] == ["title"]
        assert dsl["from"] == 10
        assert dsl["size"] == 5

    def test_search_factory(self) -> None:
        """测试使用自定义 Search 工厂."""
        builder = SearchBuilder(search_factory=lambda: Search(index="logs-*"))
        search = builder.where("level", "error").to_search()

        assert search._index == ["logs-*"]
        assert search.to_dict() == {"query": {"bool": {"must": [{"term": {"level": "error"}}]}}}

    def test_using_client(self) -> None:
        """测试绑定客户端."""
        client = MagicMock(spec=Elasticsearch)
        search = SearchBuilder(index="a").to_search(using=client)
        assert search._using is client

    def test_empty_builder(self) -> None:
        """测试空构建器生成空 Search."""
        assert SearchBuilder().to_search().to_dict() == {}


class TestExecute:
    """get / first 测试."""

    def setup_method(self) -> None:
        """每个测试方法前初始化."""
        self.client = MagicMock(spec=Elasticsearch)

    def test_get(self) -> None:
        """测试 get 通过 Search 执行并原样返回响应."""
        response = MagicMock()
        with patch.object(Search, "execute", return_value=response) as execute:
            result = SearchBuilder(index="articles").where("a", 1).get(self.client)

        assert result is response
        execute.assert_called_once_with()

    def test_first_sets_limit(self) -> None:
        """测试 first 只取一条."""
        builder = SearchBuilder(index="articles")
        with patch.object(Search, "execute", return_value=MagicMock()):
            builder.first(self.client)

        assert builder.to_search_params()["size"] == 1
