"""Show data projection and summary tests."""

import pytest
from hypothesis import given, strategies as st

from show_shaper.core import DataSourceError
from show_shaper.handlers.data import (
    ShowDataService,
    premiere_month,
    project_show,
    summarize,
)

from conftest import RAW_SHOWS


@pytest.mark.unit
def test_project_show_keeps_dashboard_fields():
    show = project_show(RAW_SHOWS[0])

    assert show.model_dump() == {
        "id": 1,
        "title": "Under the Dome",
        "genres": ["Drama", "Science-Fiction", "Thriller"],
        "rating": 6.5,
        "premiered": "2013-06-24",
        "image": "https://static.example/1.jpg",
    }


@pytest.mark.unit
def test_project_show_missing_fields_become_null():
    show = project_show({"id": 9, "name": "Sparse", "genres": None, "rating": None})

    assert show.genres == []
    assert show.rating is None
    assert show.premiered is None
    assert show.image is None


@pytest.mark.unit
@pytest.mark.parametrize(
    "premiered,month",
    [
        ("2013-06-24", "2013-06"),
        ("1999-12-01", "1999-12"),
        ("2020-02-30", None),
        ("", None),
        (None, None),
        ("soon", None),
    ],
)
def test_premiere_month(premiered, month):
    assert premiere_month(premiered) == month


@pytest.mark.unit
def test_summarize_counts_genres_and_months():
    summary = summarize(RAW_SHOWS)

    assert summary.to_json_dict() == {
        "byGenre": {
            "Drama": 2,
            "Science-Fiction": 2,
            "Thriller": 1,
            "Action": 1,
            "Crime": 1,
        },
        "byMonth": {"2013-06": 1, "2011-09": 1},
        "total": 3,
    }


@pytest.mark.unit
def test_summarize_empty():
    assert summarize([]).to_json_dict() == {"byGenre": {}, "byMonth": {}, "total": 0}


@given(st.lists(st.fixed_dictionaries({"genres": st.lists(st.sampled_from(["Drama", "Comedy"]))})))
def test_genre_counts_match_tags(shows):
    """Property test: genre counts add up to the number of genre tags."""
    summary = summarize(shows)

    assert sum(summary.by_genre.values()) == sum(len(show["genres"]) for show in shows)
    assert summary.total == len(shows)


@pytest.mark.unit
def test_service_lists_shows(shows_client):
    shows = ShowDataService(shows_client).list_shows()

    assert [show.title for show in shows] == ["Under the Dome", "Person of Interest", "Bitten"]


@pytest.mark.unit
def test_service_drops_malformed_shows(catalog, shows_client):
    catalog.payload = [*RAW_SHOWS, {"name": "No id"}, "junk"]

    assert len(ShowDataService(shows_client).list_shows()) == 3


@pytest.mark.unit
def test_service_propagates_fetch_errors(catalog, shows_client):
    catalog.status_code = 500

    with pytest.raises(DataSourceError):
        ShowDataService(shows_client).summary()
