import json
from typing import Any

import requests
import yaml

from .fetcher_protocol import SpecFetcherProtocol

DEFAULT_FETCH_TIMEOUT_SECONDS = 10.0
_ACCEPT_HEADER = "application/json, text/yaml, */*"


class SpecFetchError(RuntimeError):
    """Raised when a spec document cannot be downloaded or parsed."""


class SpecFetcher(SpecFetcherProtocol):
    def __init__(self, timeout_seconds: float = DEFAULT_FETCH_TIMEOUT_SECONDS) -> None:
        self.timeout_seconds = timeout_seconds

    def fetch(self, spec_url: str) -> Any:
        try:
            response = requests.get(spec_url, headers={"accept": _ACCEPT_HEADER}, timeout=self.timeout_seconds)
        except requests.RequestException as exc:
            raise SpecFetchError(f"Failed to fetch spec_url: {exc}") from exc

        if not response.ok:
            raise SpecFetchError(f"Failed to fetch spec_url: {response.status_code} {response.reason}")

        return parse_spec_text(response.text)


def parse_spec_text(text: str) -> Any:
    body = text.strip()
    try:
        if body.startswith("{") or body.startswith("["):
            return json.loads(body)
        return yaml.safe_load(body)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise SpecFetchError(f"Failed to parse spec document: {exc}") from exc
