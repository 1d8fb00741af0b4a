"""
Tests for Faker path resolution
"""

from datetime import datetime

import pytest

from config import GeneratorConfig
from generators import FakerGenerator, to_snake_case


@pytest.fixture(scope="module")
def generator():
    return FakerGenerator(GeneratorConfig(seed=99))


@pytest.mark.parametrize("name,expected", [
    ("fullName", "full_name"),
    ("email", "email"),
    ("zipCode", "zip_code"),
    ("IPv4", "i_pv4"),
])
def test_to_snake_case(name, expected):
    assert to_snake_case(name) == expected


class TestResolve:

    @pytest.mark.parametrize("path", [
        "person.fullName",
        "person.firstName",
        "person.last_name",
        "internet.email",
        "internet.username",
        "location.city",
        "location.zipCode",
        "address.streetAddress",
        "company.name",
        "lorem.sentence",
        "phone.number",
        "finance.accountNumber",
        "string.uuid",
        "datatype.boolean",
    ])
    def test_known_paths_resolve(self, generator, path):
        fn = generator.resolve_path(path)

        assert fn is not None
        assert fn() is not None

    def test_email_looks_like_email(self, generator):
        assert "@" in generator.resolve_path("internet.email")()

    def test_date_aliases_return_datetimes(self, generator):
        assert isinstance(generator.resolve_path("date.past")(), datetime)
        assert generator.resolve_path("date.future")() > datetime.now()

    def test_number_alias_returns_int(self, generator):
        assert isinstance(generator.resolve_path("datatype.number")(), int)

    @pytest.mark.parametrize("path", [
        "person.notAMethod",
        "nonexistent.email",
        "person._private",
        "person.__class__",
        "person",
        "person.name.extra",
        ".name",
        "person.",
        "",
    ])
    def test_unknown_paths_resolve_to_none(self, generator, path):
        assert generator.resolve_path(path) is None

    def test_resolve_never_raises_for_attributes(self, generator):
        # Non-callable provider attributes are not generators
        assert generator.resolve("person", "formats") is None

    def test_categories_include_common_providers(self, generator):
        assert {"person", "internet", "address", "company", "lorem"} <= set(generator.categories)


def test_seed_makes_output_reproducible():
    first = FakerGenerator(GeneratorConfig(seed=5)).resolve_path("person.fullName")
    second = FakerGenerator(GeneratorConfig(seed=5)).resolve_path("person.fullName")
    assert [first() for _ in range(3)] == [second() for _ in range(3)]


def test_locale_is_applied():
    generator = FakerGenerator(GeneratorConfig(locale="de_DE", seed=1))
    assert generator.faker.locales == ["de_DE"]
