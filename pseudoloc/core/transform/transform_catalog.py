from __future__ import annotations

import logging
import threading
import time
from concurrent.futures import Future, ThreadPoolExecutor
from random import Random
from typing import Mapping, Optional

from pseudoloc.core.errors import EmptyCatalogError
from pseudoloc.core.model import Catalog, CatalogRun, LocaleProfile
from pseudoloc.core.transform.transform_text import transform


logger = logging.getLogger(__name__)


def transform_catalog(
    source: Mapping[str, str],
    profile: LocaleProfile,
    rng: Random,
    *,
    require_non_empty: bool = False,
) -> Catalog:
    """Transform every entry of `source`, keeping its keys and their order.

    All entries draw from the one `rng`, in catalog order.
    """

    _check_non_empty(source, require_non_empty)
    out: Catalog = {}
    for key, value in source.items():
        out[key] = transform(value, profile, rng)
    return out


def entry_rng(seed: int, key: str) -> Random:
    """Generator for one catalog entry.

    Depends only on (seed, key), so an entry's output is the same whatever
    order entries run in and whichever thread runs them.
    """
    return Random(f"{seed}:{key}")


def new_seed() -> int:
    return time.time_ns()


def transform_catalog_concurrent(
    source: Mapping[str, str],
    profile: LocaleProfile,
    *,
    seed: Optional[int] = None,
    workers: int = 1,
    cancel: Optional[threading.Event] = None,
    require_non_empty: bool = False,
) -> CatalogRun:
    """Transform a catalog on a thread pool.

    - Each entry gets its own generator from entry_rng(seed, key); no random
      state is shared between workers.
    - When `cancel` is set, entries that have not started are skipped. The
      returned catalog then holds only completed entries, still in source
      order, and the run reports cancelled=True.
    """

    _check_non_empty(source, require_non_empty)
    if seed is None:
        seed = new_seed()

    items = list(source.items())
    logger.debug(
        "transforming %d entries for %s (seed=%s, workers=%d)",
        len(items),
        profile.locale_id,
        seed,
        workers,
    )

    def _one(key: str, value: str) -> Optional[str]:
        if cancel is not None and cancel.is_set():
            return None
        return transform(value, profile, entry_rng(seed, key))

    results: dict[str, Optional[str]] = {}
    cancelled_pending = False
    with ThreadPoolExecutor(max_workers=max(1, workers)) as ex:
        futures: list[tuple[str, Future[Optional[str]]]] = [
            (key, ex.submit(_one, key, value)) for key, value in items
        ]
        for key, f in futures:
            if f.cancelled():
                results[key] = None
                continue
            results[key] = f.result()
            if not cancelled_pending and cancel is not None and cancel.is_set():
                for _, pending in futures:
                    pending.cancel()
                cancelled_pending = True

    out: Catalog = {}
    skipped: list[str] = []
    for key, _ in items:
        value = results.get(key)
        if value is None:
            skipped.append(key)
        else:
            out[key] = value

    cancelled = bool(skipped)
    if cancelled:
        logger.debug("run cancelled after %d of %d entries", len(out), len(items))
    return CatalogRun(
        catalog=out,
        total=len(items),
        completed=len(out),
        cancelled=cancelled,
        skipped=tuple(skipped),
    )


def _check_non_empty(source: Mapping[str, str], require_non_empty: bool) -> None:
    if require_non_empty and not source:
        raise EmptyCatalogError(
            code="E_EMPTY_CATALOG",
            message="source catalog has no entries",
        )
