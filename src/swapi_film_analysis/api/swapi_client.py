import logging
import os
import time
from typing import Any, Dict, Iterable, List, Optional

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry
from dotenv import load_dotenv

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://swapi.dev/api"


class SWAPIClient:
    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        sleep_between_calls: float = 0.0,
        timeout: float = 30,
    ):
        """
        Parameters
        ----------
        base_url : str
            Root of the API, without the trailing slash.
        sleep_between_calls : float
            Polite delay between page requests.
        timeout : float
            Per-request timeout in seconds, passed to requests.
        """
        if not base_url:
            raise ValueError("SWAPI base URL is missing.")
        if timeout <= 0:
            raise ValueError(f"timeout must be positive, got {timeout}")
        self.base_url = base_url.rstrip("/")
        self.sleep = sleep_between_calls
        self.timeout = timeout
        self._name_cache: Dict[str, str] = {}

        self.session = requests.Session()
        self.session.headers.update({"Accept": "application/json"})
        retries = Retry(
            total=5,
            backoff_factor=0.5,
            status_forcelist=[429, 500, 502, 503, 504],
            allowed_methods=frozenset(["GET"]),
        )
        self.session.mount("https://", HTTPAdapter(max_retries=retries))

    @classmethod
    def from_env(cls, **kwargs) -> "SWAPIClient":
        """
        Create a SWAPIClient from environment / .env.

        Reads SWAPI_BASE_URL, SWAPI_TIMEOUT and SWAPI_SLEEP; keyword arguments
        win over the environment.
        """
        # Load .env if present (no-op if already loaded)
        load_dotenv()

        params: Dict[str, Any] = {
            "base_url": os.getenv("SWAPI_BASE_URL") or DEFAULT_BASE_URL,
        }
        timeout = os.getenv("SWAPI_TIMEOUT")
        if timeout:
            params["timeout"] = float(timeout)
        sleep = os.getenv("SWAPI_SLEEP")
        if sleep:
            params["sleep_between_calls"] = float(sleep)

        params.update(kwargs)
        return cls(**params)

    def get_url(self, url: str, params: Optional[Dict] = None) -> Any:
        logger.debug("GET %s", url)
        resp = self.session.get(url, params=params, timeout=self.timeout)
        resp.raise_for_status()
        if self.sleep:
            time.sleep(self.sleep)
        return resp.json()

    def _get(self, path: str, params: Optional[Dict] = None) -> Any:
        return self.get_url(f"{self.base_url}/{path.strip('/')}/", params=params)

    # ---- High-level endpoints ----

    def fetch_all(self, resource: str = "films") -> List[Dict[str, Any]]:
        """
        Every record of a SWAPI resource ("films", "people", "species", ...).

        SWAPI pages its lists as {"count", "next", "previous", "results"};
        "next" is followed until it is null.
        """
        payload = self._get(resource)
        if isinstance(payload, list):
            return payload

        records: List[Dict[str, Any]] = list(payload.get("results") or [])
        next_url = payload.get("next")
        while next_url:
            payload = self.get_url(next_url)
            records.extend(payload.get("results") or [])
            next_url = payload.get("next")

        expected = payload.get("count")
        if expected is not None and expected != len(records):
            logger.warning(
                "SWAPI reported %s %s but %d were returned", expected, resource, len(records)
            )
        logger.info("Fetched %d %s records", len(records), resource)
        return records

    def films(self) -> List[Dict[str, Any]]:
        return self.fetch_all("films")

    def people(self) -> List[Dict[str, Any]]:
        return self.fetch_all("people")

    def species(self) -> List[Dict[str, Any]]:
        return self.fetch_all("species")

    # ---- Parsing helpers ----

    def resolve_names(self, urls: Iterable[str], key: str = "name") -> List[str]:
        """Resolve resource URLs to their display names, caching each lookup."""
        out = []
        for url in urls:
            if url not in self._name_cache:
                self._name_cache[url] = self.get_url(url).get(key) or url
            out.append(self._name_cache[url])
        return out

    @staticmethod
    def names_by_url(records: Iterable[Dict[str, Any]], key: str = "name") -> Dict[str, str]:
        """Map each record's "url" to its display name, from an already fetched list."""
        return {r["url"]: r.get(key) for r in records if r.get("url")}
