from __future__ import annotations

import random
from typing import Any

import pytest

from gelf_reader.core.classifier import classify, parse_level, split_fields
from gelf_reader.core.errors import InvalidValue, MissingField, TypeMismatch, ValidationError
from gelf_reader.core.models import MANDATORY_FIELDS, GelfLevel


def test_classify_mandatory_fields(gelf_message: dict[str, Any]) -> None:
    r = classify(gelf_message)
    assert r.version == "1.1"
    assert r.host == "example.org"
    assert r.short_message == "A short message"
    assert r.timestamp == 1582213226.5
    assert r.level is GelfLevel.NOTICE


def test_classify_routes_meta_and_mechanism(gelf_message: dict[str, Any]) -> None:
    gelf_message["_nested"] = {"a": [1, 2, None]}
    gelf_message["line"] = 42

    r = classify(gelf_message)

    assert dict(r.meta) == {"some_info": "foo", "nested": {"a": [1, 2, None]}}
    assert dict(r.mechanism_data) == {"facility": "app", "line": 42}


def test_mandatory_fields_never_leak_into_buckets(gelf_message: dict[str, Any]) -> None:
    r = classify(gelf_message)
    for name in ("host", "level", "short_message", "timestamp", "version"):
        assert name not in r.mechanism_data
        assert name not in r.meta


def test_underscore_host_is_independent_of_host(gelf_message: dict[str, Any]) -> None:
    gelf_message["host"] = "y"
    gelf_message["_host"] = "x"

    r = classify(gelf_message)

    assert r.host == "y"
    assert r.meta["host"] == "x"
    assert "host" not in r.mechanism_data


def test_split_fields_edge_keys() -> None:
    meta, mechanism = split_fields({"_": 1, "": 2, "__x": 3, "level": 4})
    assert meta == {"": 1, "_x": 3}
    assert mechanism == {"": 2}


def test_integer_timestamp_becomes_float(gelf_message: dict[str, Any]) -> None:
    gelf_message["timestamp"] = 1582213226
    r = classify(gelf_message)
    assert isinstance(r.timestamp, float)
    assert r.timestamp == 1582213226.0


def test_missing_version() -> None:
    with pytest.raises(MissingField) as exc:
        classify({"host": "a", "level": 3, "short_message": "m", "timestamp": 1.0})
    assert exc.value.field == "version"


def test_first_missing_field_wins() -> None:
    with pytest.raises(MissingField) as exc:
        classify({"short_message": "m"})
    assert exc.value.field == "host"


@pytest.mark.parametrize(
    ("field", "value", "expected"),
    [
        ("host", 1, "string"),
        ("short_message", ["m"], "string"),
        ("version", 1.1, "string"),
        ("timestamp", "1582213226", "number"),
        ("timestamp", True, "number"),
        ("level", None, "integer"),
        ("level", [5], "integer"),
    ],
)
def test_type_mismatch(gelf_message: dict[str, Any], field: str, value: Any, expected: str) -> None:
    gelf_message[field] = value
    with pytest.raises(TypeMismatch) as exc:
        classify(gelf_message)
    assert exc.value.field == field
    assert exc.value.expected == expected


@pytest.mark.parametrize("value", ["notice", "Notice", "08", "8", -1, 8, 5.0, True, ""])
def test_invalid_level(gelf_message: dict[str, Any], value: Any) -> None:
    gelf_message["level"] = value
    with pytest.raises(InvalidValue) as exc:
        classify(gelf_message)
    assert exc.value.field == "level"


def test_empty_host_is_invalid(gelf_message: dict[str, Any]) -> None:
    gelf_message["host"] = ""
    with pytest.raises(InvalidValue) as exc:
        classify(gelf_message)
    assert exc.value.field == "host"


def test_parse_level_accepts_digits_and_digit_strings() -> None:
    assert [parse_level(i) for i in range(8)] == list(GelfLevel)
    assert parse_level("0") is GelfLevel.EMERGENCY
    assert parse_level("7") is GelfLevel.DEBUG


def test_validation_errors_share_base() -> None:
    assert issubclass(MissingField, ValidationError)
    assert issubclass(ValidationError, ValueError)


def _random_document(rng: random.Random) -> dict[str, Any]:
    doc: dict[str, Any] = {
        "host": "h",
        "level": rng.randrange(8),
        "short_message": "m",
        "timestamp": rng.random() * 1e9,
        "version": "1.1",
    }
    names = ["host", "level", "version", "x", "y", "", "short_message", "timestamp", "_", "a_b"]
    for _ in range(rng.randrange(1, 12)):
        name = rng.choice(names) + rng.choice(["", str(rng.randrange(3))])
        key = rng.choice(["_", "", "__"]) + name
        if key in MANDATORY_FIELDS:
            continue
        doc[key] = rng.choice([None, True, 1, 1.5, "v", [1, "a"], {"k": [None]}])
    return doc


@pytest.mark.parametrize("seed", range(50))
def test_routing_partitions_every_key(seed: int) -> None:
    raw = _random_document(random.Random(seed))

    r = classify(raw)

    for k, v in raw.items():
        if k.startswith("_"):
            assert r.meta[k[1:]] == v
            assert k not in r.mechanism_data
        elif k in MANDATORY_FIELDS:
            assert k not in r.mechanism_data
        else:
            assert r.mechanism_data[k] == v
            assert k not in r.meta or ("_" + k) in raw
    assert len(r.meta) + len(r.mechanism_data) == len(raw) - len(MANDATORY_FIELDS)
    assert classify(r.to_dict()) == r


def test_huge_integer_timestamp(gelf_message: dict[str, Any]) -> None:
    gelf_message["timestamp"] = int("9" * 400)
    with pytest.raises(InvalidValue) as exc:
        classify(gelf_message)
    assert exc.value.field == "timestamp"


@pytest.mark.parametrize("value", [float("nan"), float("inf"), float("-inf")])
def test_non_finite_timestamp(gelf_message: dict[str, Any], value: float) -> None:
    gelf_message["timestamp"] = value
    with pytest.raises(InvalidValue):
        classify(gelf_message)
