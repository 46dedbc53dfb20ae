"""Tests for the JSON run codec."""

import pytest

from xhprof_runs.errors import CorruptPayloadError, PayloadEncodeError
from xhprof_runs.storage.codec import JSONRunCodec


@pytest.fixture
def codec() -> JSONRunCodec:
    return JSONRunCodec()


def test_round_trips_nested_payload(codec: JSONRunCodec):
    payload = {
        "main()": {"ct": 1, "wt": 120, "cpu": 98.5},
        "main()==>strlen": {"ct": 3, "wt": 4, "mu": -16},
        "meta": {"tags": ["a", "b", {"deep": [1, 2.5, None, True]}], "name": "naïve ✓"},
    }
    assert codec.decode(codec.encode(payload)) == payload


def test_encodes_utf8_bytes(codec: JSONRunCodec):
    data = codec.encode({"κ": "✓"})
    assert isinstance(data, bytes)
    assert "✓".encode("utf-8") in data


def test_rejects_unserializable_payload(codec: JSONRunCodec):
    with pytest.raises(PayloadEncodeError):
        codec.encode({"bad": object()})


def test_rejects_non_string_keys(codec: JSONRunCodec):
    with pytest.raises(PayloadEncodeError, match="keys must be strings"):
        codec.encode({"ok": {1: "one"}})


def test_rejects_non_finite_floats(codec: JSONRunCodec):
    with pytest.raises(PayloadEncodeError):
        codec.encode({"wt": float("nan")})


def test_rejects_circular_payload(codec: JSONRunCodec):
    payload: dict = {}
    payload["self"] = payload
    with pytest.raises(PayloadEncodeError):
        codec.encode(payload)


@pytest.mark.parametrize(
    "data",
    [b"", b"{not json", b"\xff\xfe\x00", b'a:1:{s:4:"main";i:1;}', b'{"wt": NaN}'],
)
def test_decode_rejects_corrupt_data(codec: JSONRunCodec, data: bytes):
    with pytest.raises(CorruptPayloadError) as exc_info:
        codec.decode(data, source="run.xhprof")
    assert exc_info.value.path.name == "run.xhprof"


def test_corrupt_payload_error_is_value_error(codec: JSONRunCodec):
    with pytest.raises(ValueError):
        codec.decode(b"[")


def _nested_dict(depth: int) -> dict:
    payload: dict = {}
    node = payload
    for _ in range(depth):
        child: dict = {}
        node["k"] = child
        node = child
    return payload


def test_rejects_deeply_nested_payload(codec: JSONRunCodec):
    with pytest.raises(PayloadEncodeError):
        codec.encode(_nested_dict(100_000))


def test_decode_rejects_deeply_nested_data(codec: JSONRunCodec):
    with pytest.raises(CorruptPayloadError):
        codec.decode(b"[" * 200_000, source="deep.xhprof")
