"""
schema-driven record generator for the test suites.

a schema is a dict of field -> spec, where a spec is
  - a faker provider name ('word', 'city', ...) or (name, kwargs)
  - {'_gen_provider': 'choice', 'from': [...]}
  - {'_gen_provider': 'ref', 'key': 'other_field'}
  - {'_gen_provider': 'literal', 'value': ...}
  - a nested dict, or [{'_gen_items': spec, '_gen_count': n | (low, high)}]
"""
import numpy as np
from faker import Faker
from typing import Any, Dict, List, Optional

from pullq import create, Enumerable


class Generator:
    """schema interpreter."""

    def __init__(self, seed: Optional[int] = None):
        self._fake = Faker()
        if seed is not None:
            self._fake.seed_instance(seed)
        self._rng = np.random.default_rng(seed)

    def _faker(self, method_name: str, kwargs: Optional[Dict] = None) -> Any:
        method = getattr(self._fake, method_name, None)
        if method is None:
            raise ValueError(f"faker has no provider '{method_name}'")
        return method(**(kwargs or {}))

    def _provider(self, spec: Dict, context: Dict) -> Any:
        provider = spec["_gen_provider"]
        if provider == "choice":
            # convert numpy's choice result to a native python type
            choice = self._rng.choice(spec["from"])
            return choice.item() if hasattr(choice, 'item') else choice
        if provider == "ref":
            if spec["key"] not in context:
                raise ValueError(f"reference to '{spec['key']}' not found in current context.")
            return context[spec["key"]]
        if provider == "literal":
            return spec["value"]
        raise ValueError(f"unknown _gen_provider: '{provider}'")

    def create(self, schema: Any, context: Optional[Dict] = None) -> Any:
        context = context or {}
        if isinstance(schema, dict):
            if "_gen_provider" in schema:
                return self._provider(schema, context)
            record = {}
            for key, spec in schema.items():
                # refs can see the parent context and the fields generated so far
                record[key] = self.create(spec, {**context, **record})
            return record

        if isinstance(schema, list):
            if not schema:
                return []
            item = schema[0]
            return [self.create(item.get('_gen_items', item), context) for _ in range(self._count(item))]

        if isinstance(schema, tuple) and len(schema) == 2 and isinstance(schema[1], dict):
            return self._faker(schema[0], schema[1])

        if isinstance(schema, str) and hasattr(self._fake, schema):
            return self._faker(schema)
        return schema

    def _count(self, item: Any) -> int:
        count = item.get("_gen_count", 3) if isinstance(item, dict) else 3
        if isinstance(count, (list, tuple)):
            low, high = count
            return int(self._rng.integers(low, high, endpoint=True))
        return count


class _SchemaProvider:
    def __init__(self, schema: Any, seed: Optional[int] = None):
        self._schema = schema
        self._generator = Generator(seed)

    def records(self, count: int) -> List[Dict]:
        return [self._generator.create(self._schema) for _ in range(count)]

    def take(self, count: int) -> Enumerable:
        """generates `count` records up front and wraps them in an enumerable"""
        return create(self.records(count))


def from_schema(schema: Any, seed: Optional[int] = None) -> _SchemaProvider:
    return _SchemaProvider(schema, seed)


# shared schemas
person_schema = {
    'id': ('pyint', {'min_value': 1, 'max_value': 100}),
    'name': 'first_name',
    'age': ('pyint', {'min_value': 18, 'max_value': 65}),
    'city': {'_gen_provider': 'choice', 'from': ['NY', 'SF', 'LA', 'CHI']},
    'department': {'_gen_provider': 'choice', 'from': ['eng', 'sales', 'hr']},
    'salary': ('pyint', {'min_value': 30000, 'max_value': 150000}),
}

order_schema = {
    'order_id': ('pyint', {'min_value': 1000, 'max_value': 9999}),
    'customer': 'first_name',
    'lines': [{'_gen_items': {'sku': 'ean8', 'qty': ('pyint', {'min_value': 1, 'max_value': 5})},
               '_gen_count': (0, 4)}],
}
