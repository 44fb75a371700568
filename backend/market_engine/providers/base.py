"""
market_engine/providers/base.py
───────────────────────────────
Shared pieces for every provider adapter: the error type, the quote
shape and a paced JSON GET helper over ``httpx``.
"""

import logging
import math
from typing import Any, Mapping, NamedTuple, Optional

import httpx

from market_engine.rate_limit import IntervalGate

logger = logging.getLogger(__name__)


class ProviderError(Exception):
    """Raised when an upstream call fails or returns an unusable body."""


class Quote(NamedTuple):
    """Snapshot of one symbol: latest close and the previous session's close."""

    close: float
    previous_close: float


def to_float(value: Any) -> float:
    """
    Coerce a provider value to ``float``; ``NaN`` when it is not numeric.

    Strings such as ``"1.25"`` are accepted; ``None``, ``"NA"`` and
    booleans are not.
    """
    if value is None or isinstance(value, bool):
        return math.nan
    try:
        return float(value)
    except (TypeError, ValueError):
        return math.nan


async def get_json(
    http: httpx.AsyncClient,
    url: str,
    params: Optional[Mapping[str, Any]] = None,
    gate: Optional[IntervalGate] = None,
) -> Any:
    """
    Issue a paced GET and decode the JSON body.

    Args:
        http:   Shared async client (timeout configured on the client).
        url:    Absolute URL.
        params: Query parameters.
        gate:   Optional pacing gate awaited before the request.

    Returns:
        Decoded JSON value.

    Raises:
        ProviderError: On transport errors, timeouts, non-2xx status or a
                       body that is not JSON.
    """
    if gate is not None:
        await gate.wait()
    try:
        response = await http.get(url, params=params)
        response.raise_for_status()
        return response.json()
    except httpx.HTTPStatusError as exc:
        raise ProviderError(
            f"{exc.response.status_code} from {exc.request.url.host}"
        ) from exc
    except httpx.HTTPError as exc:
        raise ProviderError(f"request to {url} failed: {exc!r}") from exc
    except ValueError as exc:
        raise ProviderError(f"invalid JSON from {url}") from exc
