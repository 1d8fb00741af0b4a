"""
Synthetic value generation for seed_data

Resolves "category.method" paths (e.g. "person.fullName", "internet.email")
against Faker providers. Lookups never raise: an unknown category or method
resolves to None and the caller decides what to do with the gap.
"""

import logging
import re
from typing import Any, Callable, Optional

from faker import Faker

from config import GeneratorConfig

logger = logging.getLogger(__name__)

_CAMEL_RE = re.compile(r"(?<!^)(?=[A-Z])")

# JS-style category names → Faker provider modules
CATEGORY_ALIASES = {
    "location": "address",
    "phone": "phone_number",
    "date": "date_time",
    "datatype": "python",
    "finance": "bank",
    "string": "misc",
}

# JS-style method names → Faker provider methods, per category
METHOD_ALIASES = {
    ("person", "full_name"): "name",
    ("address", "zip_code"): "postcode",
    ("address", "street"): "street_name",
    ("internet", "username"): "user_name",
    ("internet", "ip"): "ipv4",
    ("company", "name"): "company",
    ("date_time", "past"): "past_datetime",
    ("date_time", "future"): "future_datetime",
    ("date_time", "recent"): "past_datetime",
    ("python", "number"): "pyint",
    ("python", "boolean"): "pybool",
    ("misc", "uuid"): "uuid4",
    ("bank", "account_number"): "bban",
    ("phone_number", "number"): "phone_number",
}


def to_snake_case(name: str) -> str:
    """fullName -> full_name"""
    return _CAMEL_RE.sub("_", name).lower()


class FakerGenerator:
    """
    Value generator backed by a single Faker instance.

    Categories are Faker provider module names (person, internet, address,
    company, lorem, date_time, phone_number, ...).
    """

    def __init__(self, config: Optional[GeneratorConfig] = None):
        config = config or GeneratorConfig()
        self.faker = Faker(config.locale)
        if config.seed is not None:
            self.faker.seed_instance(config.seed)
        self._providers = self._index_providers()

    def _index_providers(self) -> dict[str, list[Any]]:
        providers: dict[str, list[Any]] = {}
        for provider in self.faker.get_providers():
            # e.g. "faker.providers.person" -> "person"
            name = getattr(provider, "__provider__", "").rsplit(".", 1)[-1]
            providers.setdefault(name, []).append(provider)
        return providers

    @property
    def categories(self) -> list[str]:
        return sorted(self._providers)

    def resolve(self, category: str, method: str) -> Optional[Callable[[], Any]]:
        """
        Find the generator function for category.method.

        Returns:
            A zero-argument callable, or None if nothing matches.
        """
        category = CATEGORY_ALIASES.get(category, to_snake_case(category))
        providers = self._providers.get(category)
        if not providers:
            return None

        snake = to_snake_case(method)
        candidates = [METHOD_ALIASES.get((category, snake)), snake, method]
        for name in candidates:
            if not name or name.startswith("_"):
                continue
            for provider in providers:
                fn = getattr(provider, name, None)
                if callable(fn):
                    return fn
        return None

    def resolve_path(self, path: str) -> Optional[Callable[[], Any]]:
        """Resolve a dotted "category.method" path; malformed paths resolve to None."""
        parts = str(path).split(".")
        if len(parts) != 2 or not all(parts):
            return None
        return self.resolve(parts[0], parts[1])
