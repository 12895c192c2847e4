"""Build registry backed by a remote JSON service.

The service is expected to answer ``GET {base_url}/builds/{package}/{version}``
with a JSON list of build entries (the catalogue entry shape, see
``depclosure.registry.catalogue``), or a ``{"builds": [...]}`` mapping.
HTTP 404 means nothing is published for that package/version.

Transport problems are translated here into ``LookupUnavailableError`` so
the resolution core only ever sees its own error kinds or that one.
"""

from __future__ import annotations

import logging
import threading
from typing import Any
from urllib.parse import quote

import httpx

from depclosure import __version__
from depclosure.core.dependency.models import BuildRecord, DependencyRequirement
from depclosure.exceptions import LookupUnavailableError, RegistryFormatError
from depclosure.registry.base import BuildRegistry
from depclosure.registry.catalogue import record_from_entry

logger = logging.getLogger(__name__)

# Timeout for all registry HTTP requests (seconds).
DEFAULT_TIMEOUT: float = 30.0

# User-Agent sent with every request.
USER_AGENT: str = f"depclosure/{__version__}"


class HttpRegistry(BuildRegistry):
    """Registry that fetches build records over HTTP.

    Responses are cached per (package, version) for the lifetime of the
    instance; the cache is guarded by a lock so one registry can serve
    concurrent resolution runs.

    Args:
        base_url: Service root, e.g. ``https://builds.example.com/api``.
        timeout: Per-request timeout in seconds.
        client: Optional preconfigured ``httpx.Client`` (e.g. with a mock
            transport). Closed by ``close()`` only if created here.
    """

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        client: httpx.Client | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._owns_client = client is None
        self._client = client or httpx.Client(
            timeout=timeout,
            headers={"User-Agent": USER_AGENT},
            follow_redirects=True,
        )
        self._cache: dict[tuple[str, str], list[BuildRecord]] = {}
        self._lock = threading.Lock()

    @property
    def registry_name(self) -> str:
        return self.base_url

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> HttpRegistry:
        return self

    def build_url(self, package_name: str, version: str) -> str:
        return (
            f"{self.base_url}/builds/"
            f"{quote(package_name, safe='')}/{quote(version, safe='')}"
        )

    def find_records(self, package_name: str, version: str) -> list[BuildRecord]:
        """Fetch (or return cached) records for one package/version.

        Raises:
            LookupUnavailableError: The service could not be queried or
                returned something other than a build list. The error's
                ``architecture`` is None at this level.
        """
        key = (package_name, version)
        with self._lock:
            cached = self._cache.get(key)
        if cached is not None:
            return list(cached)

        records = self._fetch(package_name, version)
        with self._lock:
            self._cache[key] = records
        return list(records)

    def lookup(
        self, package_name: str, version: str, architecture: str
    ) -> tuple[DependencyRequirement, ...]:
        try:
            return super().lookup(package_name, version, architecture)
        except LookupUnavailableError as exc:
            if exc.architecture is not None:
                raise
            raise LookupUnavailableError(
                package_name, version, architecture, exc.reason
            ) from exc

    def _fetch(self, package_name: str, version: str) -> list[BuildRecord]:
        url = self.build_url(package_name, version)

        def unavailable(reason: str) -> LookupUnavailableError:
            logger.warning("Registry lookup failed for %s: %s", url, reason)
            return LookupUnavailableError(package_name, version, None, reason)

        try:
            resp = self._client.get(url)
            if resp.status_code == 404:
                return []
            resp.raise_for_status()
            payload: Any = resp.json()
        except httpx.TimeoutException as exc:
            raise unavailable("timeout") from exc
        except httpx.HTTPStatusError as exc:
            raise unavailable(f"HTTP {exc.response.status_code}") from exc
        except httpx.RequestError as exc:
            raise unavailable(f"request error: {exc}") from exc
        except ValueError as exc:
            raise unavailable("invalid JSON in response") from exc

        if isinstance(payload, dict):
            payload = payload.get("builds")
        if not isinstance(payload, list):
            raise unavailable("response is not a list of builds")

        try:
            records = [record_from_entry(entry, url) for entry in payload]
        except RegistryFormatError as exc:
            raise unavailable(str(exc)) from exc

        matching = [
            r for r in records
            if r.package_name == package_name and r.version == version
        ]
        if len(matching) != len(records):
            logger.warning(
                "Ignoring %d records from %s for other builds",
                len(records) - len(matching), url,
            )
        return matching
