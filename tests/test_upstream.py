"""UpstreamClient and the JSON codec it uses on both sides of the proxy."""

import httpx
import pytest

from core.exceptions import InvalidUpstreamResponse
from core.request_types import PreparedRequest
from services.upstream import UpstreamClient, decode_json, encode_json


def _prepared(body):
    return PreparedRequest("https://upstream.test/api", {"Content-Type": "application/json"}, body)


def test_out_of_range_numbers_decode_to_none():
    assert decode_json('{"a": 1e400, "b": -1e400, "c": 2.5}') == {"a": None, "b": None, "c": 2.5}


@pytest.mark.parametrize("literal", ["NaN", "Infinity", "-Infinity"])
def test_non_standard_constants_are_rejected(literal):
    with pytest.raises(ValueError):
        decode_json(f'{{"a": {literal}}}')


def test_unpaired_surrogates_are_escaped():
    assert encode_json({"s": "x\ud800y", "t": "é"}) == '{"s":"x\\ud800y","t":"é"}'.encode()


def test_paired_surrogate_escapes_stay_one_character():
    decoded = decode_json('"\\ud83d\\ude00"')

    assert encode_json(decoded) == "\"\U0001F600\"".encode()


async def test_timeout_is_passed_per_request(request_logger):
    seen = []

    def record(request):
        seen.append(request.extensions["timeout"])
        return httpx.Response(200, json={})

    async with httpx.AsyncClient(transport=httpx.MockTransport(record)) as http:
        await UpstreamClient(http, timeout=2.5).forward(_prepared({}), request_logger)

    assert seen == [{"connect": 2.5, "read": 2.5, "write": 2.5, "pool": 2.5}]


async def test_unparseable_body_raises_invalid_upstream_response(request_logger):
    transport = httpx.MockTransport(lambda request: httpx.Response(200, content=b"nope"))

    async with httpx.AsyncClient(transport=transport) as http:
        with pytest.raises(InvalidUpstreamResponse) as exc_info:
            await UpstreamClient(http).forward(_prepared({"a": 1}), request_logger)

    assert exc_info.value.status_code == 200
    assert request_logger.errors[0][:2] == ("VibeLive", 502)
