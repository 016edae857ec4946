import asyncio

import httpx

from bioreel_recommendation.pipeline import CandidateFetchPipeline

from fakes import FakeOMDb, movie, scenario_d_omdb, search_page


def fetch(fake: FakeOMDb, *, limit=10, min_rating=8.0, term="science fiction", **kwargs):
    async def go():
        client = fake.client()
        try:
            pipeline = CandidateFetchPipeline(client, **kwargs)
            return await pipeline.fetch_recommendations(term, limit, min_rating)
        finally:
            await client.aclose()

    return asyncio.run(go())


def steps_of(debug, kind):
    return [s for s in debug["steps"] if s["step"] == kind]


def test_scenario_d_keeps_rated_titles_in_search_order():
    fake = scenario_d_omdb()
    movies, debug = fetch(fake, limit=10, min_rating=8.0)

    assert [m.imdb_id for m in movies] == ["tt0000001", "tt0000003", "tt0000005"]
    assert [m.rating for m in movies] == [9.1, 8.8, 8.0]

    filtered = {s["imdbID"]: s["imdbRating"] for s in steps_of(debug, "filtered_out")}
    assert filtered == {"tt0000002": "7.5", "tt0000004": "N/A"}
    assert steps_of(debug, "final_candidates") == [{"step": "final_candidates", "count": 5}]
    assert debug["steps"][-1] == {"step": "done", "accepted": 3}
    assert debug["search_term"] == "science fiction"


def test_scenario_d_with_limit_three_stops_after_third_accept():
    fake = scenario_d_omdb()
    movies, debug = fetch(fake, limit=3, min_rating=8.0)

    assert [m.rating for m in movies] == [9.1, 8.8, 8.0]
    assert [c for c in fake.calls if c[0] == "detail"][-1] == ("detail", "tt0000005")
    assert debug["limit"] == 3
    assert debug["steps"][-1] == {"step": "done", "accepted": 3}

    fake.pages[1]["Search"].append({"imdbID": "tt0000006", "Title": "Extra", "Year": "2002"})
    fake.details["tt0000006"] = movie("tt0000006", "9.9")
    fake.calls.clear()
    movies, _ = fetch(fake, limit=3, min_rating=8.0)

    assert [m.imdb_id for m in movies] == ["tt0000001", "tt0000003", "tt0000005"]
    assert ("detail", "tt0000006") not in fake.calls
    assert [c for c in fake.calls if c[0] == "detail"][-1] == ("detail", "tt0000005")


def test_calls_are_strictly_sequential():
    fake = scenario_d_omdb()
    fetch(fake)

    assert fake.max_in_flight == 1
    assert fake.calls == [
        ("search", "1"),
        ("search", "2"),
        ("detail", "tt0000001"),
        ("detail", "tt0000002"),
        ("detail", "tt0000003"),
        ("detail", "tt0000004"),
        ("detail", "tt0000005"),
    ]


def test_limit_stops_detail_fetches():
    fake = scenario_d_omdb()
    movies, _ = fetch(fake, limit=2, min_rating=8.0)

    assert [m.imdb_id for m in movies] == ["tt0000001", "tt0000003"]
    detail_calls = [c for c in fake.calls if c[0] == "detail"]
    assert detail_calls == [("detail", "tt0000001"), ("detail", "tt0000002"), ("detail", "tt0000003")]


def test_min_rating_is_inclusive():
    fake = scenario_d_omdb()
    movies, _ = fetch(fake, min_rating=9.1)
    assert [m.imdb_id for m in movies] == ["tt0000001"]


def test_candidates_dedup_across_pages():
    fake = FakeOMDb(
        pages={1: search_page("tt1", "tt2"), 2: search_page("tt2", "tt3", "tt1")},
        details={i: movie(i, "9.0") for i in ("tt1", "tt2", "tt3")},
    )
    movies, debug = fetch(fake)

    assert [m.imdb_id for m in movies] == ["tt1", "tt2", "tt3"]
    assert steps_of(debug, "final_candidates")[0]["count"] == 3
    assert [c for c in fake.calls if c[0] == "detail"] == [
        ("detail", "tt1"),
        ("detail", "tt2"),
        ("detail", "tt3"),
    ]


def test_candidate_cap_stops_paging():
    pages = {p: search_page(*(f"tt{p}{i:02d}" for i in range(20))) for p in range(1, 6)}
    fake = FakeOMDb(pages=pages, details={})
    _, debug = fetch(fake, limit=1)

    assert [c for c in fake.calls if c[0] == "search"] == [("search", "1"), ("search", "2"), ("search", "3")]
    # the cap only stops paging; the last page is kept whole
    assert steps_of(debug, "final_candidates")[0]["count"] == 60


def test_paging_stops_at_max_pages():
    pages = {p: search_page(f"tt{p}") for p in range(1, 10)}
    fake = FakeOMDb(pages=pages, details={})
    fetch(fake, max_pages=5)

    assert [c for c in fake.calls if c[0] == "search"] == [("search", str(p)) for p in range(1, 6)]


def test_failed_search_page_keeps_earlier_candidates():
    fake = FakeOMDb(
        pages={1: search_page("tt1", "tt2"), 2: 500},
        details={"tt1": movie("tt1", "8.5"), "tt2": movie("tt2", "9.5")},
    )
    movies, debug = fetch(fake)

    assert [m.imdb_id for m in movies] == ["tt1", "tt2"]
    failed = steps_of(debug, "search_page_failed")
    assert len(failed) == 1 and failed[0]["page"] == 2
    assert ("search", "3") not in fake.calls


def test_first_page_network_error_yields_empty_result():
    fake = FakeOMDb(pages={1: httpx.ConnectError("connection refused")})
    movies, debug = fetch(fake)

    assert movies == []
    assert steps_of(debug, "search_page_failed")[0]["page"] == 1
    assert all(c[0] == "search" for c in fake.calls)
    assert debug["steps"][-1] == {"step": "done", "accepted": 0}


def test_empty_first_page_records_upstream_error():
    fake = FakeOMDb(pages={})
    movies, debug = fetch(fake)

    assert movies == []
    empty = steps_of(debug, "search_page_empty")
    assert empty == [{"step": "search_page_empty", "page": 1, "error": "Movie not found!"}]


def test_detail_failures_are_skipped():
    fake = FakeOMDb(
        pages={1: search_page("tt1", "tt2", "tt3", "tt4")},
        details={
            "tt1": 503,
            "tt2": httpx.ReadTimeout("timed out"),
            # tt3 falls through to the fake's "Incorrect IMDb ID." body
            "tt4": movie("tt4", "8.2"),
        },
    )
    movies, debug = fetch(fake)

    assert [m.imdb_id for m in movies] == ["tt4"]
    assert [s["imdbID"] for s in steps_of(debug, "detail_failed")] == ["tt1", "tt2"]
    assert steps_of(debug, "detail_no_match") == [
        {"step": "detail_no_match", "imdbID": "tt3", "error": "Incorrect IMDb ID."}
    ]


def test_detail_without_imdb_id_uses_candidate_id():
    payload = movie("tt9", "9.0")
    payload.pop("imdbID")
    fake = FakeOMDb(pages={1: search_page("tt9")}, details={"tt9": payload})
    movies, _ = fetch(fake)
    assert movies[0].imdb_id == "tt9"


def test_movie_detail_fields_are_mapped():
    fake = FakeOMDb(
        pages={1: search_page("tt7")},
        details={"tt7": movie("tt7", "8.4", Title="Arrival", Year="2016", Director="Denis Villeneuve")},
    )
    movies, _ = fetch(fake)
    m = movies[0]
    assert (m.title, m.year, m.director, m.rating_raw) == ("Arrival", "2016", "Denis Villeneuve", "8.4")
    assert m.runtime == "120 min"
    assert m.poster == "N/A"
