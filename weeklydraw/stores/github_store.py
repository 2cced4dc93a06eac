"""JSON collections kept as files in a GitHub repository (contents API).

Every collection is ``<prefix><key>.json`` on one branch. The blob ``sha``
returned by the API is the version token; writes send it back so GitHub
rejects a commit made against a stale file.
"""

from __future__ import annotations

import base64
import binascii
import json
import logging
from typing import Any

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from weeklydraw.errors import ConflictError, NotFoundError, StoreUnavailableError
from weeklydraw.stores.base import CollectionStore

logger = logging.getLogger(__name__)


def build_http_session(token: str, retries: int = 3, backoff_factor: float = 0.5) -> requests.Session:
    """Create a requests session with retry/backoff for transient network errors.

    Only idempotent reads are retried; a retried PUT could commit twice.
    """

    retry = Retry(
        total=retries,
        connect=retries,
        read=retries,
        status=retries,
        backoff_factor=backoff_factor,
        status_forcelist=(429, 500, 502, 503, 504),
        allowed_methods=("GET",),
        raise_on_status=False,
    )
    adapter = HTTPAdapter(max_retries=retry)

    session = requests.Session()
    session.headers.update(
        {
            "Accept": "application/vnd.github+json",
            "User-Agent": "weeklydraw",
            "X-GitHub-Api-Version": "2022-11-28",
        }
    )
    if token:
        session.headers["Authorization"] = f"Bearer {token}"
    session.mount("https://", adapter)
    session.mount("http://", adapter)
    return session


class GitHubStore(CollectionStore):
    name = "github"

    def __init__(
        self,
        repo: str,
        token: str,
        branch: str = "main",
        path_prefix: str = "data/",
        api_url: str = "https://api.github.com",
        timeout_seconds: float = 10.0,
        http: requests.Session | None = None,
    ) -> None:
        self._repo = repo.strip().strip("/")
        self._token = token
        self._branch = branch
        self._prefix = path_prefix.lstrip("/")
        self._api_url = api_url.rstrip("/")
        self._timeout = timeout_seconds
        self._http = http or build_http_session(token)

    def _require_credentials(self) -> None:
        # Missing credentials degrade each call instead of failing startup.
        if not self._repo or not self._token:
            raise StoreUnavailableError(message="GitHub store is not configured (GITHUB_REPO / GITHUB_TOKEN)")

    def _url(self, path: str) -> str:
        return f"{self._api_url}/repos/{self._repo}/contents/{self._prefix}{path}"

    def _request(self, method: str, url: str, **kwargs: Any) -> requests.Response:
        self._require_credentials()
        try:
            return self._http.request(method, url, timeout=self._timeout, **kwargs)
        except requests.RequestException as exc:
            logger.error("GitHub %s %s failed: %s", method, url, exc)
            raise StoreUnavailableError(message="GitHub API request failed", details=str(exc)) from exc

    @staticmethod
    def _unavailable(resp: requests.Response) -> StoreUnavailableError:
        return StoreUnavailableError(
            message=f"GitHub API returned {resp.status_code}",
            details=resp.text[:500],
        )

    def read(self, key: str) -> tuple[Any, str]:
        resp = self._request("GET", self._url(f"{key}.json"), params={"ref": self._branch})
        if resp.status_code == 404:
            raise NotFoundError(message=f"Collection {key} not found")
        if resp.status_code != 200:
            raise self._unavailable(resp)

        payload: dict[str, Any] = resp.json()
        if isinstance(payload, list):
            raise NotFoundError(message=f"{key} is a directory")
        try:
            raw = base64.b64decode(payload.get("content") or "")
            value = json.loads(raw.decode("utf-8")) if raw.strip() else []
        except (binascii.Error, UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise StoreUnavailableError(message=f"Corrupt collection {key}", details=str(exc)) from exc
        return value, str(payload["sha"])

    def write(self, key: str, value: Any, token: str | None) -> str:
        content = json.dumps(value, ensure_ascii=False, indent=2).encode("utf-8")
        body: dict[str, Any] = {
            "message": f"Update {key}.json",
            "content": base64.b64encode(content).decode("ascii"),
            "branch": self._branch,
        }
        if token is not None:
            body["sha"] = token

        resp = self._request("PUT", self._url(f"{key}.json"), json=body)
        # 409: sha does not match; 422: sha missing for an existing file.
        if resp.status_code in (409, 422):
            raise ConflictError(message=f"Collection {key} changed since it was read")
        if resp.status_code not in (200, 201):
            raise self._unavailable(resp)
        return str(resp.json()["content"]["sha"])

    def list_keys(self, prefix: str) -> list[str]:
        resp = self._request("GET", self._url(prefix.rstrip("/")), params={"ref": self._branch})
        if resp.status_code == 404:
            raise NotFoundError(message=f"Directory {prefix} not found")
        if resp.status_code != 200:
            raise self._unavailable(resp)

        entries = resp.json()
        if not isinstance(entries, list):
            raise NotFoundError(message=f"{prefix} is not a directory")
        return sorted(
            str(e["name"])[: -len(".json")]
            for e in entries
            if e.get("type") == "file" and str(e.get("name", "")).endswith(".json")
        )

    def close(self) -> None:
        self._http.close()
