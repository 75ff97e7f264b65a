"""Minimal Supabase (PostgREST) client for read-only queries."""

import logging
import re
from typing import Any, Optional

import requests

from .config import DatabaseConfig
from .exceptions import DatabaseError

logger = logging.getLogger(__name__)

REST_PATH = "/rest/v1"
DEFAULT_PAGE_SIZE = 1000
CONTENT_RANGE_PATTERN = re.compile(r"^(?:\d+-\d+|\*)/(\d+|\*)$")


def _filter_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "null"
    return str(value)


def build_filters(filters: Optional[dict[str, Any]]) -> dict[str, str]:
    """
    Render equality filters as PostgREST query parameters.

    Args:
        filters: Mapping of column name to expected value

    Returns:
        Query parameters, e.g. {"is_active": "eq.true"}
    """
    if not filters:
        return {}
    params = {}
    for column, value in filters.items():
        # PostgREST only accepts "is" for null comparisons
        operator = "is" if value is None else "eq"
        params[column] = f"{operator}.{_filter_value(value)}"
    return params


def parse_content_range(header: Optional[str]) -> Optional[int]:
    """
    Extract the total row count from a Content-Range header.

    Args:
        header: Header value like "0-24/573" or "*/0"

    Returns:
        Total count, or None when the server reports it as unknown ("*")

    Raises:
        DatabaseError: If the header is missing or malformed
    """
    if not header:
        raise DatabaseError("Missing Content-Range header in count response")

    match = CONTENT_RANGE_PATTERN.match(header.strip())
    if not match:
        raise DatabaseError("Malformed Content-Range header", detail=header)

    total = match.group(1)
    if total == "*":
        return None
    return int(total)


class SupabaseClient:
    """Thin wrapper around the PostgREST HTTP API."""

    def __init__(
        self,
        url: str,
        service_role_key: str,
        timeout: float = 10.0,
        session: Optional[requests.Session] = None,
        page_size: int = DEFAULT_PAGE_SIZE,
    ):
        self.base_url = url.rstrip("/") + REST_PATH
        self.timeout = timeout
        self.page_size = page_size
        self.session = session or requests.Session()
        self.session.headers.update({
            "apikey": service_role_key,
            "Authorization": f"Bearer {service_role_key}",
            "Accept": "application/json",
        })

    @classmethod
    def from_config(cls, config: DatabaseConfig) -> "SupabaseClient":
        return cls(config.url, config.service_role_key, timeout=config.timeout)

    def _request(self, method: str, table: str, params: dict[str, str], headers: Optional[dict] = None):
        url = f"{self.base_url}/{table}"
        try:
            response = self.session.request(
                method,
                url,
                params=params,
                headers=headers,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise DatabaseError(f"{method} {table} request failed", detail=str(e)) from e

        if response.status_code >= 400:
            raise DatabaseError(
                f"{method} {table} returned an error",
                status_code=response.status_code,
                detail=response.text or None,
            )

        return response

    def count(self, table: str, filters: Optional[dict[str, Any]] = None) -> Optional[int]:
        """
        Count rows matching equality filters without fetching them.

        Args:
            table: Table name
            filters: Optional {column: value} equality filters

        Returns:
            Exact row count, or None if the server could not report it

        Raises:
            DatabaseError: If the request fails
        """
        params = {"select": "*", **build_filters(filters)}
        response = self._request("HEAD", table, params, headers={"Prefer": "count=exact"})
        return parse_content_range(response.headers.get("Content-Range"))

    def select(
        self,
        table: str,
        columns: str,
        filters: Optional[dict[str, Any]] = None,
        order: Optional[str] = None,
    ) -> list[dict[str, Any]]:
        """
        Select columns from all rows matching equality filters.

        Rows are fetched in pages of `page_size` using Range headers, so the
        result is not cut off at the server's max-rows limit. `page_size` must
        not exceed that limit (1000 on Supabase by default).

        Args:
            table: Table name
            columns: PostgREST select list, e.g. "status"
            filters: Optional {column: value} equality filters
            order: Optional PostgREST order, e.g. "id"; keeps pages stable

        Returns:
            List of row dicts

        Raises:
            DatabaseError: If a request fails or a body is not a JSON array
        """
        params = {"select": columns, **build_filters(filters)}
        if order:
            params["order"] = order
        rows: list[dict[str, Any]] = []
        offset = 0

        while True:
            headers = {
                "Range-Unit": "items",
                "Range": f"{offset}-{offset + self.page_size - 1}",
            }
            response = self._request("GET", table, params, headers=headers)

            try:
                page = response.json()
            except ValueError as e:
                raise DatabaseError(f"GET {table} returned invalid JSON", detail=str(e)) from e

            if not isinstance(page, list):
                raise DatabaseError(f"GET {table} returned unexpected payload", detail=type(page).__name__)

            rows.extend(page)
            if len(page) < self.page_size:
                return rows
            offset += self.page_size
