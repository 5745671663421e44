"""SearchBuilder 使用示例.

本示例展示如何使用 SearchBuilder 构建搜索请求:
1. 基础条件与 should 条件
2. 嵌套条件组 (where_bool)
3. 关联字段查询 (where_has)
4. 排序、聚合与高亮
5. 字段映射
"""

from elasticsearch.dsl import Q

from elasticfluent import FieldMapper, QueryField, SearchBuilder


# ==================== 示例 1: 基础条件 ====================
def example_basic_conditions():
    """示例: status = active，且 (author = alice 或 author = bob)."""
    builder = SearchBuilder(index="articles")

    params = (
        builder.where("status", "active")
        .where("views", ">=", 100)
        .or_where("author", "alice")
        .or_where("author", "bob")
        .where_not_in("category", ["spam", "draft"])
        .to_search_params()
    )

    print("基础条件 DSL:")
    print(params)
    return params


# ==================== 示例 2: 嵌套条件组 ====================
def example_nested_groups():
    """示例: (type = post AND level >= 3) OR (type = alert AND priority = high)."""
    builder = SearchBuilder(index="events")

    builder.where_bool(
        lambda q: q.where_bool(
            lambda g: g.where("type", "post").where("level", ">=", 3), "should"
        ).where_bool(
            lambda g: g.where({"type": "alert", "priority": "high"}), "should"
        )
    )

    params = builder.to_search_params()
    print("\n嵌套条件组 DSL:")
    print(params)
    return params


# ==================== 示例 3: 关联字段查询 ====================
def example_where_has():
    """示例: 作者名为 alice，且存在评分大于 3 的评论（nested 类型）."""
    builder = SearchBuilder(index="articles")

    builder.where_has("author", lambda q: q.where("name", "alice"))
    builder.where_has(
        "comments",
        lambda q: q.where("score", ">", 3),
        nested=True,
        score_mode="max",
    )

    params = builder.to_search_params()
    print("\n关联字段查询 DSL:")
    print(params)
    return params


# ==================== 示例 4: 排序、聚合与高亮 ====================
def example_sort_aggregation_highlight():
    """示例: 全文检索 + 排序 + 聚合 + 高亮 + 分页."""
    builder = SearchBuilder(index="articles")

    params = (
        builder.where(Q("multi_match", query="elasticsearch", fields=["title", "content"]))
        .where_between("published_at", "2024-01-01", "2024-12-31")
        .order_by_desc("published_at")
        .terms("tag", size=20)
        .stats("views")
        .range("views", [{"to": 100}, {"from": 100, "to": 1000}, {"from": 1000}])
        .highlight("content", fragment_size=150)
        .highlight_options(pre_tags=["<em>"], post_tags=["</em>"])
        .offset(0)
        .limit(10)
        .to_search_params()
    )

    print("\n排序、聚合与高亮 DSL:")
    print(params)
    return params


# ==================== 示例 5: 字段映射 ====================
def example_field_mapping():
    """示例: 调用方字段名与索引字段名不一致."""
    field_mapper = FieldMapper(
        [
            QueryField(field="title", es_field="title", es_field_for_agg="title.keyword"),
            QueryField(field="status", es_field="doc_status", display="状态"),
        ]
    )
    builder = SearchBuilder(index="articles", field_mapper=field_mapper)

    search = builder.where("status", "published").order_by("title").to_search()

    print("\n字段映射 DSL:")
    print(search.to_dict())
    return search


if __name__ == "__main__":
    # 运行所有示例
    example_basic_conditions()
    example_nested_groups()
    example_where_has()
    example_sort_aggregation_highlight()
    example_field_mapping()
