"""Task registry loading from the OPS Central spreadsheet (CSV export)."""

import csv
import io
import logging
from collections.abc import Mapping
from urllib.parse import quote

import httpx

from app.reconciliation_engine.engine import RegistryTask

logger = logging.getLogger("opscentral.registry")

ESTIMATE_HEADER_HINT = "estimated"
HOURS_HEADER_HINTS = ("estimated", "hours")


class RegistryFetchError(RuntimeError):
    """The registry sheet could not be downloaded."""


def header_key(header: str) -> str:
    """'Time Tracker ID' -> 'timetrackerid'."""
    return "".join(header.lower().split())


def build_sheet_csv_url(base_url: str, sheet_id: str, tab_name: str) -> str:
    return f"{base_url.rstrip('/')}/{sheet_id}/gviz/tq?tqx=out:csv&sheet={quote(tab_name)}"


async def fetch_sheet_csv(
    base_url: str,
    sheet_id: str,
    tab_name: str = "Support",
    timeout: float = 15.0,
    client: httpx.AsyncClient | None = None,
) -> str:
    """Download one registry tab as CSV text.

    Raises:
        RegistryFetchError: on a transport failure or non-2xx response.
    """
    url = build_sheet_csv_url(base_url, sheet_id, tab_name)
    owns_client = client is None
    if owns_client:
        client = httpx.AsyncClient(timeout=timeout, follow_redirects=True)

    try:
        response = await client.get(url)
    except httpx.HTTPError as e:
        raise RegistryFetchError(f"Failed to fetch sheet: {e}") from e
    finally:
        if owns_client:
            await client.aclose()

    if response.status_code >= 400:
        raise RegistryFetchError(f"Failed to fetch sheet: HTTP {response.status_code}")

    return response.text


def _to_float(value: str) -> float | None:
    try:
        return float(value.replace(",", ""))
    except ValueError:
        return None


def _find_column(keys: list[str], predicate) -> int | None:
    return next((i for i, k in enumerate(keys) if i > 1 and predicate(k)), None)


def parse_registry_csv(
    csv_text: str,
    platform_columns: Mapping[str, str] | None = None,
) -> list[RegistryTask]:
    """Parse registry CSV rows into tasks.

    The first column is the task id and the second the task name. The first
    header mentioning "estimated" gives the expected hours, falling back to
    the first one mentioning "hours".
    `platform_columns` maps header keys (see `header_key`) to source names;
    a non-empty cell tags the task for that source with the cell as its
    platform identifier. Rows without an id are skipped.
    """
    platform_columns = {header_key(k): v for k, v in (platform_columns or {}).items()}
    reader = csv.reader(io.StringIO(csv_text.strip()))
    headers = next(reader, None)
    if not headers:
        return []

    keys = [header_key(h) for h in headers]
    hours_index = _find_column(keys, lambda k: ESTIMATE_HEADER_HINT in k)
    if hours_index is None:
        hours_index = _find_column(keys, lambda k: any(hint in k for hint in HOURS_HEADER_HINTS))

    tasks: list[RegistryTask] = []
    for row in reader:
        values = [v.strip() for v in row]
        if not values or not values[0]:
            continue

        hours = 0.0
        platform_refs: dict[str, str] = {}
        attributes: dict = {}
        for index, key in enumerate(keys[2:], start=2):
            value = values[index] if index < len(values) else ""
            if not value:
                continue
            if index == hours_index:
                hours = _to_float(value) or 0.0
            elif key in platform_columns:
                platform_refs[platform_columns[key]] = value
            elif any(hint in key for hint in HOURS_HEADER_HINTS) or "logged" in key:
                number = _to_float(value)
                attributes[key] = number if number is not None else value
            else:
                attributes[key] = value

        tasks.append(RegistryTask(
            id=values[0],
            name=values[1] if len(values) > 1 else "",
            hours=hours,
            platform_refs=platform_refs,
            attributes=attributes,
        ))

    logger.debug("Parsed %d registry tasks", len(tasks))
    return tasks
