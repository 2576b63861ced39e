"""Administrative reporting over the application table.

Builds a pandas DataFrame from the store so that the dashboard figures and
the CSV export are computed from the same data.
"""

import logging
from pathlib import Path
from typing import Union

import pandas as pd

from lpg_connect.schemas import ApplicationStatistics, Status
from lpg_connect.stores.base import ApplicationStore

logger = logging.getLogger(__name__)

APPLICATION_COLUMNS = [
    "app_id",
    "applicant_username",
    "name",
    "mobile_no",
    "address",
    "num_connections",
    "status",
    "created_at",
]


def applications_frame(store: ApplicationStore) -> pd.DataFrame:
    """Return every application as a DataFrame, in store order.

    ``status`` holds the plain status name; ``created_at`` is ``NaT`` for
    records from the volatile store.
    """
    rows = [app.model_dump(mode="python") for app in store.list_all_applications()]
    df = pd.DataFrame(rows, columns=APPLICATION_COLUMNS)
    df["status"] = df["status"].map(lambda s: s.value if isinstance(s, Status) else s)
    df["created_at"] = pd.to_datetime(df["created_at"])
    return df


def summarize(store: ApplicationStore) -> ApplicationStatistics:
    """Compute the admin dashboard figures.

    Every status appears in ``status_counts`` even when its count is zero.
    The approval rate is a percentage rounded to one decimal place.
    """
    df = applications_frame(store)
    total = len(df)

    counts = df["status"].value_counts()
    status_counts = {s: int(counts.get(s.value, 0)) for s in Status}

    approval_rate = (
        round(status_counts[Status.APPROVED] / total * 100, 1) if total > 0 else 0.0
    )

    by_user = df.groupby("applicant_username").size()
    applications_by_user = {str(user): int(n) for user, n in by_user.items()}

    latest = df["created_at"].max() if total > 0 else pd.NaT
    latest_application_at = None if pd.isna(latest) else latest.to_pydatetime()

    return ApplicationStatistics(
        total_users=len(store.list_users()),
        total_applications=total,
        status_counts=status_counts,
        approval_rate=approval_rate,
        applications_by_user=applications_by_user,
        latest_application_at=latest_application_at,
    )


def export_applications_csv(store: ApplicationStore, path: Union[str, Path]) -> int:
    """Write every application to ``path`` as CSV.

    Returns:
        The number of data rows written.
    """
    df = applications_frame(store)
    df.to_csv(path, index=False)
    logger.info("Exported %d applications to %s", len(df), path)
    return len(df)
