"""
Tool catalog tests
The advertised tools, their argument contracts, and parity with the handler registry.
"""

import pytest
from mcp import types

from handlers import HANDLER_REGISTRY, list_all_handlers
from tools import get_tool_catalog, get_tool_names

# name -> (required, optional)
EXPECTED_TOOLS = {
    "list_tables": ([], []),
    "describe_table": (["table"], []),
    "get_relationships": ([], []),
    "execute_query": (["sql"], []),
    "explain_query": (["sql"], []),
    "insert_data": (["table", "data"], []),
    "seed_data": (["table", "mapping"], ["count"]),
    "update_data": (["table", "data", "where"], []),
    "delete_data": (["table", "where"], []),
    "execute_migration": (["sql"], []),
    "format_sql": (["sql"], []),
    "export_data": (["sql", "filename"], ["format"]),
}


def _tool(name: str) -> types.Tool:
    return next(t for t in get_tool_catalog() if t.name == name)


class TestToolCatalog:

    def test_catalog_lists_all_tools(self):
        assert get_tool_names() == list(EXPECTED_TOOLS)

    def test_names_are_unique(self):
        names = get_tool_names()
        assert len(names) == len(set(names))

    def test_catalog_is_stable(self):
        first = get_tool_catalog()
        second = get_tool_catalog()
        assert [t.model_dump() for t in first] == [t.model_dump() for t in second]

    def test_returned_list_is_a_copy(self):
        catalog = get_tool_catalog()
        catalog.clear()
        assert len(get_tool_catalog()) == len(EXPECTED_TOOLS)

    @pytest.mark.parametrize("name", list(EXPECTED_TOOLS))
    def test_argument_contract(self, name):
        required, optional = EXPECTED_TOOLS[name]
        schema = _tool(name).inputSchema

        assert schema["type"] == "object"
        assert sorted(schema.get("required", [])) == sorted(required)
        assert set(schema["properties"]) == set(required) | set(optional)

    def test_defaults(self):
        assert _tool("seed_data").inputSchema["properties"]["count"]["default"] == 10
        export_format = _tool("export_data").inputSchema["properties"]["format"]
        assert export_format["default"] == "json"
        assert export_format["enum"] == ["json", "csv"]

    def test_object_arguments_declared_as_objects(self):
        assert _tool("insert_data").inputSchema["properties"]["data"]["type"] == "object"
        assert _tool("update_data").inputSchema["properties"]["where"]["type"] == "object"
        assert _tool("seed_data").inputSchema["properties"]["mapping"]["type"] == "object"

    @pytest.mark.parametrize("name", list(EXPECTED_TOOLS))
    def test_every_tool_has_a_description(self, name):
        assert _tool(name).description


class TestHandlerRegistry:

    def test_every_tool_has_a_handler(self):
        assert set(list_all_handlers()) == set(get_tool_names())

    def test_handlers_are_coroutines(self):
        import inspect
        for name, handler in HANDLER_REGISTRY.items():
            assert inspect.iscoroutinefunction(handler), f"{name} handler must be async"
