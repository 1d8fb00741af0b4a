"""
Tests for seed_data: bulk inserts of Faker-generated rows
"""

import pytest

from config import GeneratorConfig
from generators import FakerGenerator
from handlers.seed_handlers import DEFAULT_SEED_COUNT, build_rows
from tests.handler_test_utils import count_rows


class TestSeedData:

    async def test_seeds_requested_count(self, helper, db_connection):
        text = await helper.assert_tool_success("seed_data", {
            "table": "users",
            "count": 5,
            "mapping": {"name": "person.fullName", "email": "internet.email"},
        })

        assert text == "Successfully seeded 5 rows into users"
        rows = await db_connection.fetch_rows("SELECT name, email FROM users")
        assert len(rows) == 5
        assert all(row["name"] and "@" in row["email"] for row in rows)

    async def test_default_count(self, helper, db_connection):
        await helper.assert_tool_success("seed_data", {
            "table": "users", "mapping": {"name": "person.firstName"},
        })
        assert await count_rows(db_connection, "users") == DEFAULT_SEED_COUNT

    async def test_unknown_method_leaves_column_null(self, helper, db_connection):
        await helper.assert_tool_success("seed_data", {
            "table": "users",
            "count": 5,
            "mapping": {"name": "person.fullName", "email": "internet.notARealMethod"},
        })

        rows = await db_connection.fetch_rows("SELECT name, email FROM users")
        assert len(rows) == 5
        assert all(row["email"] is None for row in rows)
        assert all(row["name"] for row in rows)

    async def test_only_unknown_generators_insert_default_rows(self, helper, db_connection):
        await helper.assert_tool_success("seed_data", {
            "table": "users", "count": 3, "mapping": {"name": "nothing.here"},
        })

        rows = await db_connection.fetch_rows("SELECT name, email, age FROM users")
        assert rows == [{"name": None, "email": None, "age": None}] * 3

    async def test_zero_count(self, helper, db_connection):
        await helper.assert_tool_success(
            "seed_data", {"table": "users", "count": 0, "mapping": {"name": "person.name"}},
            "Successfully seeded 0 rows",
        )
        assert await count_rows(db_connection, "users") == 0

    async def test_count_as_string(self, helper, db_connection):
        await helper.assert_tool_success(
            "seed_data", {"table": "users", "count": "2", "mapping": {"name": "person.name"}}
        )
        assert await count_rows(db_connection, "users") == 2

    @pytest.mark.parametrize("count", [-1, 2.5, "lots", True])
    async def test_invalid_count(self, helper, count):
        await helper.assert_tool_error(
            "seed_data", {"table": "users", "count": count, "mapping": {"name": "person.name"}}, "count"
        )

    async def test_empty_mapping(self, helper):
        await helper.assert_tool_error("seed_data", {"table": "users", "mapping": {}}, "mapping")

    async def test_unknown_table(self, helper):
        await helper.assert_tool_error(
            "seed_data", {"table": "ghosts", "count": 1, "mapping": {"name": "person.name"}}, "ghosts"
        )


class TestBuildRows:

    @pytest.fixture
    def generator(self):
        return FakerGenerator(GeneratorConfig(seed=42))

    def test_columns_follow_mapping(self, generator):
        rows = build_rows(generator, {"a": "person.firstName", "b": "lorem.word"}, 3)

        assert len(rows) == 3
        assert all(list(row) == ["a", "b"] for row in rows)

    def test_unresolved_columns_omitted(self, generator):
        rows = build_rows(generator, {"a": "person.firstName", "b": "bogus", "c": 17}, 2)
        assert all(list(row) == ["a"] for row in rows)

    def test_failing_generator_omits_value(self, generator, monkeypatch):
        def explode():
            raise RuntimeError("boom")

        original = generator.resolve_path
        monkeypatch.setattr(
            generator, "resolve_path",
            lambda path: explode if path == "custom.explode" else original(path),
        )

        rows = build_rows(generator, {"a": "person.firstName", "b": "custom.explode"}, 2)
        assert all(list(row) == ["a"] for row in rows)

    def test_same_seed_same_rows(self):
        mapping = {"name": "person.fullName", "email": "internet.email"}
        first = build_rows(FakerGenerator(GeneratorConfig(seed=7)), mapping, 4)
        second = build_rows(FakerGenerator(GeneratorConfig(seed=7)), mapping, 4)
        assert first == second
