"""Parallel fetch batches."""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable

logger = logging.getLogger(__name__)


def fetch_all(max_workers: int = 5, **calls: Callable[[], Any]) -> dict[str, Any]:
    """Run independent fetches in parallel and return their results by name.

    All or nothing: the first exception (in argument order) propagates and
    the results of the other calls are discarded.

    Example:
        data = fetch_all(composers=api.get_composers, artists=api.get_artists)
        data["composers"]
    """
    if not calls:
        return {}

    with ThreadPoolExecutor(max_workers=min(max_workers, len(calls))) as executor:
        futures = {name: executor.submit(call) for name, call in calls.items()}
        results = {}
        for name, future in futures.items():
            results[name] = future.result()

    logger.debug(f"Fetched batch: {', '.join(results)}")
    return results
