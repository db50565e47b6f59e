# src/services/reconciler.py

"""Snapshot reconciliation: per-product deltas and today's sales.

A new scrape is merged into the previously persisted snapshot:

* ``sales_difference`` is the change in the cumulative counter since the
  last snapshot.  Negative values (e.g. a counter reset on the dashboard)
  are passed through unmodified.
* ``todays_sales`` accumulates positive deltas while the prior record was
  last updated on the same local calendar day, restarts from the current
  delta on a new day, and is carried forward unchanged when the delta is
  zero or negative.
* Products missing from the new batch are dropped; the scrape is trusted
  to be a full listing.

The engine performs no I/O.  Callers must serialise calls around the
read-modify-write of the state store.
"""

import logging
from collections.abc import Sequence
from datetime import date, datetime, tzinfo

from src.models.product import ProductRecord, RawObservation
from src.models.snapshot import DashboardTotals, Snapshot

logger = logging.getLogger("sales_watch.reconciler")


def local_date(moment: datetime, tz: tzinfo | None = None) -> date:
    """Return the calendar date of *moment* in the local time zone.

    Naive datetimes are taken to be local already.  Aware datetimes are
    converted to *tz*, or to the system zone when *tz* is ``None``.
    """
    if moment.tzinfo is None:
        return moment.date()
    return moment.astimezone(tz).date()


def _new_record(obs: RawObservation, now: datetime) -> ProductRecord:
    return ProductRecord(
        name=obs.name,
        total_sales=obs.total_sales,
        previous_sales=0,
        sales_difference=obs.total_sales,
        todays_sales=obs.total_sales,
        last_updated=now,
        product_url=obs.product_url,
        pending_requests=obs.pending_requests,
    )


def _merged_record(
    prior: ProductRecord,
    obs: RawObservation,
    now: datetime,
    tz: tzinfo | None,
) -> ProductRecord:
    difference = obs.total_sales - prior.total_sales
    same_day = (
        prior.last_updated is not None
        and local_date(prior.last_updated, tz) == local_date(now, tz)
    )

    if difference > 0 and same_day:
        todays_sales = prior.todays_sales + difference
    elif difference > 0:
        todays_sales = difference
    else:
        todays_sales = prior.todays_sales

    if difference < 0:
        logger.warning(
            "Sales counter for '%s' went down (%d -> %d)",
            obs.name,
            prior.total_sales,
            obs.total_sales,
        )

    return ProductRecord(
        name=obs.name,
        total_sales=obs.total_sales,
        previous_sales=prior.total_sales,
        sales_difference=difference,
        todays_sales=todays_sales,
        last_updated=now,
        product_url=obs.product_url,
        pending_requests=obs.pending_requests,
    )


def reconcile(
    previous: Snapshot | None,
    observations: Sequence[RawObservation],
    now: datetime,
    totals: DashboardTotals | None = None,
    tz: tzinfo | None = None,
) -> Snapshot:
    """Merge an observation batch into the previous snapshot.

    Args:
        previous: The persisted snapshot, or ``None`` on first run.
        observations: The full scrape, in dashboard order.
        now: Reconciliation time; becomes ``last_updated`` and
            ``last_scraped``.
        totals: Dashboard-level totals from the same scrape.
        tz: Zone used for the day-boundary check on aware timestamps.

    Returns:
        A new :class:`Snapshot`; *previous* is not modified.
    """
    prior_by_name: dict[str, ProductRecord] = (
        {p.name: p for p in previous.products} if previous else {}
    )

    records: list[ProductRecord] = []
    seen: set[str] = set()
    new_count = 0

    for obs in observations:
        if obs.name in seen:
            logger.warning(
                "Duplicate product '%s' in batch, keeping the first",
                obs.name,
            )
            continue
        seen.add(obs.name)

        prior = prior_by_name.get(obs.name)
        if prior is None:
            records.append(_new_record(obs, now))
            new_count += 1
        else:
            records.append(_merged_record(prior, obs, now, tz))

    dropped = len(set(prior_by_name) - seen)
    changed = sum(1 for r in records if r.sales_difference != 0)
    logger.info(
        "Reconciled %d products (%d new, %d changed, %d dropped)",
        len(records),
        new_count,
        changed,
        dropped,
    )

    return Snapshot(
        products=records,
        dashboard_totals=totals or DashboardTotals(),
        last_scraped=now,
    )
