"""Legislator lookup against the Google Civic Information API."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from event_manager.common.fs import read_text
from event_manager.common.http import HttpClient, HttpRequestError, RetryConfig, TimeoutConfig
from event_manager.common.models import LookupResult, Official


def read_api_key(path: Path) -> str:
    return read_text(path).strip()


def _as_tuple(value: Any) -> tuple[str, ...]:
    if not isinstance(value, list):
        return ()
    return tuple(str(item) for item in value)


def parse_officials(payload: dict[str, Any]) -> list[Official]:
    officials = payload.get("officials")
    if not isinstance(officials, list):
        raise ValueError("payload has no officials list")

    out: list[Official] = []
    for item in officials:
        if not isinstance(item, dict) or not item.get("name"):
            raise ValueError("official entry without a name")
        out.append(
            Official(
                name=str(item["name"]),
                party=item.get("party"),
                phones=_as_tuple(item.get("phones")),
                urls=_as_tuple(item.get("urls")),
            )
        )
    return out


class CivicInfoLookup:
    def __init__(
        self,
        api_key: str,
        http_client: HttpClient,
        *,
        endpoint: str,
        levels: list[str],
        roles: list[str],
    ) -> None:
        self.api_key = api_key
        self.http_client = http_client
        self.endpoint = endpoint
        self.levels = list(levels)
        self.roles = list(roles)

    @classmethod
    def from_config(cls, civic_cfg: dict, api_key: str) -> "CivicInfoLookup":
        client = HttpClient(
            timeout=TimeoutConfig(
                connect=float(civic_cfg["timeout"]["connect"]),
                read=float(civic_cfg["timeout"]["read"]),
            ),
            retry=RetryConfig(max_attempts=int(civic_cfg["max_attempts"])),
        )
        return cls(
            api_key,
            client,
            endpoint=civic_cfg["endpoint"],
            levels=civic_cfg["levels"],
            roles=civic_cfg["roles"],
        )

    def close(self) -> None:
        self.http_client.close()

    def legislators_by_zipcode(self, zipcode: str) -> LookupResult:
        params = {
            "address": zipcode,
            "levels": self.levels,
            "roles": self.roles,
            "key": self.api_key,
        }
        try:
            payload = self.http_client.get_json(self.endpoint, params=params)
            return LookupResult.success(parse_officials(payload))
        except (HttpRequestError, ValueError):
            return LookupResult.failure()

    def __call__(self, zipcode: str) -> LookupResult:
        return self.legislators_by_zipcode(zipcode)
