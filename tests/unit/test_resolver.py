from __future__ import annotations

import httpx
import pytest

from frontend_buildpack.errors import ResolveError
from frontend_buildpack.resolver import (
    ADVICE_GREATER,
    ADVICE_MISSING,
    ADVICE_WILDCARD,
    effective_range,
    resolve_node_version,
)

URL = "https://resolver.test/node/resolve"


def _client(handler) -> httpx.Client:
    return httpx.Client(transport=httpx.MockTransport(handler))


@pytest.mark.parametrize("requested", [None, "", "null", "  "])
def test_missing_range_defers_to_service_default(requested) -> None:
    rng, advice = effective_range(requested)
    assert rng == ""
    assert advice == [ADVICE_MISSING]


def test_wildcard_range_defers_to_service_default() -> None:
    assert effective_range("*") == ("", [ADVICE_WILDCARD])


def test_greater_than_range_is_kept_with_advice() -> None:
    assert effective_range(">=0.8") == (">=0.8", [ADVICE_GREATER])


def test_plain_range_has_no_advice() -> None:
    assert effective_range("0.10.x") == ("0.10.x", [])


def test_resolve_sends_range_and_strips_response() -> None:
    seen: list[str | None] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request.url.params.get("range"))
        return httpx.Response(200, text="v0.10.30\n")

    res = resolve_node_version("~0.10.0", URL, client=_client(handler))
    assert seen == ["~0.10.0"]
    assert res.version == "0.10.30"
    assert res.effective_range == "~0.10.0"
    assert res.advisories == []


def test_resolve_without_range_sends_empty_range() -> None:
    seen: list[str | None] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request.url.params.get("range"))
        return httpx.Response(200, text="0.10.30")

    res = resolve_node_version(None, URL, client=_client(handler))
    assert seen == [""]
    assert res.requested_range is None
    assert res.advisories == [ADVICE_MISSING]


def test_resolver_http_error_raises() -> None:
    client = _client(lambda request: httpx.Response(500, text="oops"))
    with pytest.raises(ResolveError):
        resolve_node_version("0.10.x", URL, client=client)


def test_resolver_empty_body_raises() -> None:
    client = _client(lambda request: httpx.Response(200, text="\n"))
    with pytest.raises(ResolveError):
        resolve_node_version("0.10.x", URL, client=client)


def test_resolver_transport_error_raises() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("unreachable", request=request)

    with pytest.raises(ResolveError):
        resolve_node_version("0.10.x", URL, client=_client(handler))
