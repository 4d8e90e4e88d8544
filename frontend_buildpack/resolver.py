"""Node version resolution against a remote semver service.

The service takes ``range=<semver range>`` and answers with a bare version
string. An empty range asks for its default (latest stable).
"""

from __future__ import annotations

import httpx

from frontend_buildpack.errors import ResolveError
from frontend_buildpack.logging import get_logger
from frontend_buildpack.types import Resolution

log = get_logger(__name__)

ADVICE_MISSING = "Specify a node version in package.json"
ADVICE_WILDCARD = "Avoid using semver ranges like '*' in engines.node"
ADVICE_GREATER = "Avoid using semver ranges starting with '>' in engines.node"

RESOLVE_TIMEOUT = 30


def effective_range(requested: str | None) -> tuple[str, list[str]]:
    """Return the range to send to the resolver and any advisories.

    Absent, null and wildcard ranges fall back to the service default.
    """
    value = (requested or "").strip()
    if value in {"", "null"}:
        return "", [ADVICE_MISSING]
    if value == "*":
        return "", [ADVICE_WILDCARD]
    if value.startswith(">"):
        return value, [ADVICE_GREATER]
    return value, []


def resolve_node_version(
    requested: str | None,
    resolver_url: str,
    *,
    client: httpx.Client | None = None,
) -> Resolution:
    rng, advisories = effective_range(requested)
    log.debug("resolving node range %r via %s", rng, resolver_url)

    own_client = client is None
    http = client or httpx.Client(timeout=RESOLVE_TIMEOUT, follow_redirects=True)
    try:
        resp = http.get(resolver_url, params={"range": rng})
        resp.raise_for_status()
    except httpx.HTTPError as exc:
        raise ResolveError(f"Unable to resolve node version for range {rng!r}: {exc}") from exc
    finally:
        if own_client:
            http.close()

    version = resp.text.strip()
    if not version:
        raise ResolveError(f"Resolver returned no version for range {rng!r}")
    # The mirror layout expects a bare version
    version = version.removeprefix("v")

    log.info("resolved node range %r to %s", rng, version)
    return Resolution(
        requested_range=requested,
        effective_range=rng,
        version=version,
        advisories=advisories,
    )
