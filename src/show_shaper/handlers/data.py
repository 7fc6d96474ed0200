"""Show Data Handler.

Feeds the dashboard's components: the table and cards list shows, the chart
groups them by genre or premiere month, the KPI counts them.
"""

from datetime import date
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ..clients.shows import ShowsClient
from ..core import get_logger
from ..monitoring import trace_operation

logger = get_logger(__name__)


class Show(BaseModel):
    """One show, projected to the fields the dashboard renders."""

    model_config = ConfigDict(frozen=True)

    id: int
    title: str
    genres: list[str] = Field(default_factory=list)
    rating: float | None = None
    premiered: str | None = None
    image: str | None = None


class ShowSummary(BaseModel):
    """Counts behind the chart and KPI components."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    by_genre: dict[str, int] = Field(default_factory=dict, alias="byGenre")
    by_month: dict[str, int] = Field(default_factory=dict, alias="byMonth")
    total: int = 0

    def to_json_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


def _nested(raw: dict[str, Any], key: str, field: str) -> Any:
    value = raw.get(key)
    return value.get(field) if isinstance(value, dict) else None


def project_show(raw: dict[str, Any]) -> Show:
    """Keep id, title, genres, average rating, premiere date and medium image."""
    return Show(
        id=raw["id"],
        title=raw["name"],
        genres=raw.get("genres") or [],
        rating=_nested(raw, "rating", "average"),
        premiered=raw.get("premiered"),
        image=_nested(raw, "image", "medium"),
    )


def premiere_month(premiered: Any) -> str | None:
    """``YYYY-MM`` for an ISO premiere date, None when missing or unparseable."""
    if not isinstance(premiered, str) or not premiered:
        return None
    try:
        day = date.fromisoformat(premiered[:10])
    except ValueError:
        return None
    return f"{day.year:04d}-{day.month:02d}"


def summarize(shows: list[dict[str, Any]]) -> ShowSummary:
    """
    Count shows per genre and per premiere month.

    A show counts once for each of its genres; shows without a usable
    premiere date are left out of the monthly counts but not the total.
    """
    by_genre: dict[str, int] = {}
    by_month: dict[str, int] = {}

    for show in shows:
        for genre in show.get("genres") or []:
            by_genre[genre] = by_genre.get(genre, 0) + 1
        month = premiere_month(show.get("premiered"))
        if month is not None:
            by_month[month] = by_month.get(month, 0) + 1

    return ShowSummary(by_genre=by_genre, by_month=by_month, total=len(shows))


class ShowDataService:
    """Fetches the show index and shapes it for the dashboard."""

    def __init__(self, client: ShowsClient) -> None:
        self.client = client

    def list_shows(self) -> list[Show]:
        """
        Raises:
            DataSourceError: If the catalog cannot be fetched
        """
        with trace_operation("list_shows"):
            raw = self.client.fetch_shows()
            shows = []
            for item in raw:
                try:
                    shows.append(project_show(item))
                except (KeyError, TypeError, ValidationError) as e:
                    logger.warning("show_dropped", error=str(e))
        logger.info("shows_listed", shows=len(shows))
        return shows

    def summary(self) -> ShowSummary:
        """
        Raises:
            DataSourceError: If the catalog cannot be fetched
        """
        with trace_operation("summarize_shows"):
            raw = self.client.fetch_shows()
            result = summarize([item for item in raw if isinstance(item, dict)])
        logger.info("shows_summarized", total=result.total, genres=len(result.by_genre))
        return result


__all__ = [
    "Show",
    "ShowSummary",
    "ShowDataService",
    "project_show",
    "premiere_month",
    "summarize",
]
