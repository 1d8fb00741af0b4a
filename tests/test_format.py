"""
Tests for format_sql
"""

import pytest
import sqlglot

from sql_formatter import format_sql


class TestFormatSql:

    async def test_keywords_uppercased_and_split(self, helper):
        text = await helper.assert_tool_success(
            "format_sql", {"sql": "select id, name from users where id = 1"}
        )

        assert text == "SELECT id, name\nFROM users\nWHERE id = 1"

    async def test_formatting_is_idempotent(self, helper):
        once = await helper.assert_tool_success(
            "format_sql", {"sql": "select u.id, count(*) from users u join posts p on p.user_id = u.id group by u.id"}
        )
        twice = await helper.assert_tool_success("format_sql", {"sql": once})
        assert once == twice

    async def test_multiple_statements(self, helper):
        text = await helper.assert_tool_success("format_sql", {"sql": "select 1; select 2"})
        assert text == "SELECT 1;\n\nSELECT 2"

    async def test_unterminated_string(self, helper):
        await helper.assert_tool_error("format_sql", {"sql": "SELECT 'abc FROM users"})

    async def test_allowed_in_safe_mode(self, safe_helper):
        await safe_helper.assert_tool_success("format_sql", {"sql": "delete from users"}, "DELETE FROM")

    async def test_does_not_touch_the_database(self, helper):
        await helper.assert_tool_success("format_sql", {"sql": "select * from table_that_does_not_exist"})


class TestLayoutOnly:

    def test_concatenation_operator_kept(self):
        text = format_sql("select 'a' || 'b' as s")
        assert "'a' || 'b'" in text
        assert " OR " not in text

    def test_functions_not_rewritten(self):
        text = format_sql("select ifnull(a, 0) from t")
        assert "ifnull(a, 0)" in text
        assert "COALESCE" not in text.upper()

    def test_line_comments_kept(self):
        text = format_sql("select a -- note\nfrom t")
        assert "-- note" in text
        assert "/*" not in text
        assert text.endswith("FROM t")

    def test_block_comments_kept(self):
        assert "/* why */" in format_sql("select /* why */ a from t")

    def test_literals_and_quoting_kept(self):
        text = format_sql("select `weird name`, 'it''s', \"dq\" from t where x=1.50")
        assert "`weird name`" in text
        assert "'it''s'" in text
        assert '"dq"' in text
        assert "x = 1.50" in text

    def test_postgres_syntax_survives(self):
        text = format_sql("select id::text from t where id = $1")
        assert "id::text" in text.lower()
        assert "$1" in text

    def test_unbalanced_parentheses_are_laid_out(self):
        assert format_sql("select * from users where (id = 1") == "SELECT *\nFROM users\nWHERE (id = 1"

    def test_joins_and_subqueries(self):
        text = format_sql(
            "select a.id from a left join b on b.a_id = a.id where a.id in (select a_id from c)"
        )

        assert "\nLEFT JOIN b ON b.a_id = a.id" in text
        assert "\n  SELECT a_id" in text
        assert format_sql(text) == text

    def test_delete_and_update(self):
        assert format_sql("delete from users where id=1") == "DELETE FROM users\nWHERE id = 1"
        assert format_sql("update users set age=1 where id=2") == "UPDATE users\nSET age = 1\nWHERE id = 2"


def test_format_uses_mysql_quoting():
    assert "`weird name`" in format_sql("select `weird name` from t")


def test_tokenize_error_is_raised():
    with pytest.raises(sqlglot.errors.TokenError):
        format_sql("SELECT 'abc")
