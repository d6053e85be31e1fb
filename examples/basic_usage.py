"""
Basic usage: declare a schema, build SELECTs and hydrate records.

This example demonstrates:
- Declaring columns, including an aliased one and a JSON column
- Building SELECT statements with and without filters
- Running them on an in-memory SQLite database
- Reading record attributes through fields, columns and JSON content
"""

import asyncio

from rowbind import Column, ColumnSet, JSONRecord, QueryExecutor, Schema


class Article(JSONRecord):
    json_column = "meta"
    summary: str = ""

    def headline(self):
        return self.title.upper()


class ArticleSchema(Schema):
    identifier = "blog.articles"
    table_name = "articles"
    table_alias = "a"
    record_class = Article

    def define_columns(self):
        return ColumnSet([
            Column("id", "int", primary=True),
            Column("title", "varchar(200)"),
            Column("author_name", "varchar(100)", alias="author"),
            Column("meta", "json"),
        ])


async def main():
    async with QueryExecutor("sqlite+aiosqlite:///:memory:") as executor:
        articles = ArticleSchema(executor)

        print("=" * 60)
        print("Schema")
        print("=" * 60)
        print(articles)
        print(articles.create_sql)

        await articles.create_table()
        await executor.submit(
            "INSERT INTO articles (id, title, author_name, meta) VALUES "
            "(1, 'Hello', 'Ada', '{\"tags\": [\"intro\"], \"words\": 120}'), "
            "(2, 'Again', 'Alan', NULL)"
        )

        print("\n" + "=" * 60)
        print("select_all")
        print("=" * 60)
        cursor = await articles.select_all()
        print(articles.query)
        for row in cursor:
            print(row)

        print("\n" + "=" * 60)
        print("select_by")
        print("=" * 60)
        articles.set("author", "Ada")
        cursor = await articles.select_by()
        print(articles.query, articles.query_params)

        for article in articles.hydrate_records(cursor):
            print(f"title:    {article.title}")
            print(f"author:   {article.author_name}")
            print(f"tags:     {article.tags}")
            print(f"headline: {article.call('headline').value}")
            print(f"missing:  {article.get('missing')}")


if __name__ == "__main__":
    asyncio.run(main())
