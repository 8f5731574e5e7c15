"""
Pytest configuration and shared fixtures for sdsl tests.

Provides immutable document fixtures: well-formed documents with their
expected trees, and malformed documents with the error class they raise.
"""

from dataclasses import dataclass
from typing import Any

import pytest

import sdsl


@dataclass(frozen=True)
class SdslTestCase:
    """
    Immutable container for SDSL test case data.

    Holds test input and expected behavior for consistent test execution.
    """

    description: str
    input_data: str
    should_fail: bool = False
    expected_output: Any = None
    expected_error: type[sdsl.SDSLDecodeError] = sdsl.SDSLDecodeError


@pytest.fixture
def sdsl_pass_cases() -> list[SdslTestCase]:
    """
    Provides SDSL documents that must parse, with their expected trees.
    """
    return [
        SdslTestCase("empty document", "", expected_output={}),
        SdslTestCase("blank lines only", "\n\n\n", expected_output={}),
        SdslTestCase(
            "string", "$name hello\n", expected_output={"name": "hello"}
        ),
        SdslTestCase("integer", "$age 5\n", expected_output={"age": 5}),
        SdslTestCase("float", "$age 5.5\n", expected_output={"age": 5.5}),
        SdslTestCase(
            "no trailing newline",
            "$name hello",
            expected_output={"name": "hello"},
        ),
        SdslTestCase(
            "nested object",
            "$user (\n$id 1\n)\n",
            expected_output={"user": {"id": 1}},
        ),
        SdslTestCase(
            "inline array",
            "$tags [a, b, c]\n",
            expected_output={"tags": ["a", "b", "c"]},
        ),
        SdslTestCase(
            "multi-line array",
            "$tags [\na\nb\nc\n]\n",
            expected_output={"tags": ["a", "b", "c"]},
        ),
        SdslTestCase(
            "space separated array",
            "$nums [1 2 3]\n",
            expected_output={"nums": [1, 2, 3]},
        ),
        SdslTestCase(
            "underscore in key",
            "$first_name ada\n",
            expected_output={"first_name": "ada"},
        ),
        SdslTestCase(
            "empty containers",
            "$list []\n$map ()\n",
            expected_output={"list": [], "map": {}},
        ),
        SdslTestCase(
            "two statements on one line",
            "$x 1 $y 2\n",
            expected_output={"x": 1, "y": 2},
        ),
        SdslTestCase(
            "crlf line endings",
            "$name hello\r\n$age 5\r\n",
            expected_output={"name": "hello", "age": 5},
        ),
        SdslTestCase(
            "indented statements",
            "  $a 1\n\t$b 2\n",
            expected_output={"a": 1, "b": 2},
        ),
    ]


@pytest.fixture
def sdsl_fail_cases() -> list[SdslTestCase]:
    """
    Provides malformed SDSL documents and the error each must raise.
    """
    key_error = sdsl.InvalidKeyNameError
    structure_error = sdsl.StructuralError
    coercion_error = sdsl.TypeCoercionError
    return [
        SdslTestCase("digit in key", "$na3me x\n", True, None, key_error),
        SdslTestCase(
            "key starts with digit", "$5a x\n", True, None, key_error
        ),
        SdslTestCase("dot in key", "$na.me x\n", True, None, key_error),
        SdslTestCase("dash in key", "$na-me x\n", True, None, key_error),
        SdslTestCase("paren in key", "$na(me x\n", True, None, key_error),
        SdslTestCase("bracket in key", "$na]me x\n", True, None, key_error),
        SdslTestCase("comma in key", "$na,me x\n", True, None, key_error),
        SdslTestCase(
            "unmatched bracket", "$a 1\n]\n", True, None, structure_error
        ),
        SdslTestCase(
            "bracket at document start", "]\n", True, None, structure_error
        ),
        SdslTestCase(
            "unmatched paren", "$a 1\n)\n", True, None, structure_error
        ),
        SdslTestCase(
            "bracket closes object",
            "$a (\n$b 1\n]\n",
            True,
            None,
            structure_error,
        ),
        SdslTestCase(
            "unclosed object", "$a (\n$b 1\n", True, None, structure_error
        ),
        SdslTestCase(
            "unclosed array", "$a [1, 2", True, None, structure_error
        ),
        SdslTestCase(
            "comma outside array", "$a 1, 2\n", True, None, structure_error
        ),
        SdslTestCase(
            "key without value", "$flag\n", True, None, structure_error
        ),
        SdslTestCase(
            "key followed by key", "$flag $b 1\n", True, None, structure_error
        ),
        SdslTestCase(
            "sigil inside key", "$a$b 1\n", True, None, structure_error
        ),
        SdslTestCase(
            "key without value before crlf",
            "$flag\r\n",
            True,
            None,
            structure_error,
        ),
        SdslTestCase(
            "value without key",
            "$a 5\nhello\n",
            True,
            None,
            structure_error,
        ),
        SdslTestCase(
            "paren inside array element",
            "$a [$b 1)\n",
            True,
            None,
            structure_error,
        ),
        SdslTestCase(
            "two decimal points", "$a 1.2.3\n", True, None, coercion_error
        ),
    ]
