"""
Test data generators for SDSL parsing benchmarks.

Builds each benchmark document once as Python data and renders it both
as SDSL and as JSON, so every library parses the same tree:
- Different sizes (small/large)
- Different shapes (flat/nested/arrays of scalars/arrays of objects)

SDSL cannot express booleans, nulls, negative numbers, digits in keys or
non-letter characters in strings, so the generated data avoids them.
"""

import json
import random
import string
from collections.abc import Iterator
from typing import Any

DATA_TYPES = (
    "small_object",
    "large_object",
    "scalar_array",
    "nested_structure",
    "object_array",
)

_INDENT = "    "
_STRING_TYPE = 1
_INT_TYPE = 2


def generate_test_data(data_type: str, fmt: str = "sdsl") -> str:
    """Generates an SDSL or JSON document of the specified type."""
    document = generate_document(data_type)

    if fmt == "sdsl":
        return to_sdsl(document)
    if fmt == "json":
        return json.dumps(document)
    raise ValueError(f"Unknown format: {fmt}")


def generate_document(data_type: str) -> dict[str, Any]:
    """Generates the Python tree behind a benchmark document."""
    generators = {
        "small_object": _generate_small_object,
        "large_object": _generate_large_object,
        "scalar_array": _generate_scalar_array,
        "nested_structure": _generate_nested_structure,
        "object_array": _generate_object_array,
    }

    if data_type not in generators:
        raise ValueError(f"Unknown data type: {data_type}")

    # Same document for every library and every run
    random.seed(data_type)
    return generators[data_type]()


def to_sdsl(document: dict[str, Any]) -> str:
    """
    Renders a tree as SDSL.

    Top-level and nested mappings become indented ``( ... )`` blocks;
    arrays are written inline with ``( ... )`` objects as elements.
    """
    return "".join(_statements(document, 0))


def _statements(mapping: dict[str, Any], depth: int) -> Iterator[str]:
    pad = _INDENT * depth
    for key, value in mapping.items():
        if isinstance(value, dict):
            yield f"{pad}${key} (\n"
            yield from _statements(value, depth + 1)
            yield f"{pad})\n"
        else:
            yield f"{pad}${key} {_inline(value)}\n"


def _inline(value: Any) -> str:
    if isinstance(value, dict):
        fields = " ".join(f"${k} {_inline(v)}" for k, v in value.items())
        return f"({fields})"
    if isinstance(value, list):
        return "[" + ", ".join(_inline(v) for v in value) + "]"
    if isinstance(value, str | int | float) and not isinstance(value, bool):
        return str(value)
    raise TypeError(f"SDSL cannot represent {value!r}")


def _generate_small_object() -> dict[str, Any]:
    """Generates a small document (< 1KB) with basic key-value pairs."""
    return {
        "id": 12345,
        "name": "Alice",
        "email": "alice",
        "active": "yes",
        "balance": 1234.56,
        "metadata": {"created": 20240115, "source": "api"},
    }


def _generate_large_object() -> dict[str, Any]:
    """Generates a large document (> 10KB) with many fields."""
    return {
        "user_id": random.randint(1000000, 9999999),
        "profile": {
            "personal": {
                "first_name": _random_string(10),
                "last_name": _random_string(12),
                "phone": random.randint(1000000000, 9999999999),
                "address": {
                    "street": _random_string(8),
                    "number": random.randint(1, 9999),
                    "city": _random_string(12),
                    "state": _random_string(2).upper(),
                    "zip": random.randint(10000, 99999),
                    "country": "US",
                },
            },
            "preferences": {
                "language": random.choice(["en", "es", "fr", "de", "zh"]),
                "timezone": random.choice(
                    ["UTC", "EST", "PST", "CET", "JST", "AEST"]
                ),
            },
        },
        "transactions": [
            {
                "id": i,
                "amount": round(random.uniform(1.0, 1000.0), 2),
                "currency": random.choice(["USD", "EUR", "GBP", "JPY"]),
                "timestamp": random.randint(1700000000, 1800000000),
                "description": _random_string(20),
                "status": random.choice(["completed", "pending", "failed"]),
            }
            for i in range(50)
        ],
        "activity_log": [
            {
                "timestamp": random.randint(1700000000, 1800000000),
                "action": random.choice(
                    ["login", "logout", "purchase", "view", "update"]
                ),
                "agent": _random_string(20),
            }
            for _ in range(30)
        ],
    }


def _generate_scalar_array() -> dict[str, Any]:
    """Generates a large array of strings, integers and floats."""
    items: list[Any] = []
    for _ in range(500):
        choice = random.randint(1, 3)
        if choice == _STRING_TYPE:
            items.append(_random_string(random.randint(5, 30)))
        elif choice == _INT_TYPE:
            items.append(random.randint(0, 100000))
        else:
            items.append(round(random.uniform(0.0, 100.0), 3))
    return {"items": items}


def _generate_nested_structure() -> dict[str, Any]:
    """Generates a deeply nested document."""

    def create_nested_dict(depth: int) -> dict[str, Any]:
        if depth <= 0:
            return {"value": _random_string(10)}

        return {
            "level": depth,
            "data": _random_string(15),
            "nested": create_nested_dict(depth - 1),
        }

    return {"root": create_nested_dict(30)}


def _generate_object_array() -> dict[str, Any]:
    """Generates an array of small objects, some holding arrays."""
    return {
        "points": [
            {
                "x": random.randint(0, 1000),
                "y": random.randint(0, 1000),
                "score": round(random.uniform(1.0, 100.0), 2),
                "tags": [_random_string(5) for _ in range(3)],
            }
            for _ in range(200)
        ]
    }


def _random_string(length: int) -> str:
    """Generates a random string of specified length."""
    return "".join(random.choices(string.ascii_letters, k=length))
