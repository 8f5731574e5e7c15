"""
Memory usage benchmarks for SDSL parsing.

Measures peak memory consumption of sdsl against JSON libraries parsing
the equivalent JSON documents.
"""

import json
import tracemalloc
from typing import Any

import orjson
import pytest
import ujson  # type: ignore[import-untyped]

import sdsl
from benchmarks.data_generators import DATA_TYPES
from benchmarks.data_generators import generate_test_data


def measure_memory_usage(func: Any, *args: Any) -> tuple[Any, int]:
    """
    Measures peak memory usage during function execution.

    Returns:
        Tuple of (function_result, peak_memory_bytes)
    """
    tracemalloc.start()
    try:
        result = func(*args)
        current, peak = tracemalloc.get_traced_memory()
        return result, peak
    finally:
        tracemalloc.stop()


def measure_all(data_type: str) -> dict[str, int]:
    """Returns peak memory per library for one document shape."""
    sdsl_text = generate_test_data(data_type, "sdsl")
    json_text = generate_test_data(data_type, "json")

    _, stdlib_memory = measure_memory_usage(json.loads, json_text)
    _, orjson_memory = measure_memory_usage(
        orjson.loads, json_text.encode("utf-8")
    )
    _, ujson_memory = measure_memory_usage(ujson.loads, json_text)
    _, sdsl_memory = measure_memory_usage(sdsl.loads, sdsl_text)

    return {
        "stdlib_json": stdlib_memory,
        "orjson": orjson_memory,
        "ujson": ujson_memory,
        "sdsl": sdsl_memory,
    }


class TestMemoryUsage:
    """Memory usage benchmarks for SDSL parsing."""

    @pytest.mark.parametrize("data_type", DATA_TYPES)
    def test_sdsl_memory(self, data_type: str) -> None:
        """Measures memory usage for sdsl."""
        test_data = generate_test_data(data_type)
        result, peak_memory = measure_memory_usage(sdsl.loads, test_data)

        print(f"\nsdsl {data_type}: {peak_memory:,} bytes")
        assert result

    def test_memory_comparison_summary(self) -> None:
        """Generates a memory usage comparison table."""
        results = {
            data_type: measure_all(data_type) for data_type in DATA_TYPES
        }
        libraries = ["stdlib_json", "orjson", "ujson", "sdsl"]

        print("\n" + "=" * 80)
        print("MEMORY USAGE COMPARISON (bytes)")
        print("=" * 80)
        print(f"{'Data Type':<20} " + " ".join(f"{n:<12}" for n in libraries))
        print("-" * 80)

        for data_type, measurements in results.items():
            row = " ".join(f"{measurements[n]:<12,}" for n in libraries)
            print(f"{data_type:<20} {row}")

        print("=" * 80)

        print("\nMEMORY vs stdlib_json")
        print("-" * 40)
        for data_type, measurements in results.items():
            baseline = measurements["stdlib_json"]
            ratios = " ".join(
                f"{n}={measurements[n] / baseline:.2f}x"
                for n in libraries[1:]
            )
            print(f"{data_type}: {ratios}")

        assert len(results) == len(DATA_TYPES)
