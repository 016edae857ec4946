import pytest

from bioreel_core.errors import InvalidFeedback, MovieNotInRun, NoActiveRun
from bioreel_core.types import GitHubUser, LastRun, MovieDetail
from bioreel_genre.naive_bayes import build_seeded_model
from bioreel_user.bias import clamp_bias, init_bias, nudge
from bioreel_user.feedback import FeedbackService, build_movie_training_text
from bioreel_user.session import SessionId, SessionRecord

ALIEN = MovieDetail(
    imdb_id="tt0000042",
    title="Alien Invasion",
    year="1999",
    genre="Sci-Fi",
    plot="spaceship",
    actors="N/A",
    director="",
    rating=8.3,
    rating_raw="8.3",
)


def make_session(last_run: LastRun | None = None) -> SessionRecord:
    return SessionRecord(
        sid=SessionId("sid-1"),
        user=GitHubUser(login="octocat"),
        access_token="gho_test_token",
        last_run=last_run,
    )


@pytest.fixture()
def model():
    return build_seeded_model()


@pytest.fixture()
def service(model):
    return FeedbackService(model)


@pytest.fixture()
def session():
    return make_session(LastRun(genre="Sci-Fi", movies_by_id={ALIEN.imdb_id: ALIEN}))


def test_build_movie_training_text_skips_blank_and_na():
    assert build_movie_training_text(ALIEN) == "Alien Invasion Sci-Fi spaceship 1999"


def test_scenario_e_like_trains_shared_model(service, model, session):
    before = model.predict("spaceship").scores["Sci-Fi"]
    docs_before = model.stats().per_label["Sci-Fi"].documents

    outcome = service.apply_feedback(session, ALIEN.imdb_id, "like")

    assert model.predict("spaceship").scores["Sci-Fi"] > before
    assert model.stats().per_label["Sci-Fi"].documents == docs_before + 1
    assert outcome.ok is True
    assert outcome.applied_genre == "Sci-Fi"
    assert outcome.updated_bias["Sci-Fi"] == pytest.approx(0.25)
    assert outcome.model_stats == model.stats()


def test_dislike_only_moves_session_bias(service, model, session):
    stats_before = model.stats()

    outcome = service.apply_feedback(session, ALIEN.imdb_id, "dislike")

    assert outcome.updated_bias["Sci-Fi"] == pytest.approx(-0.25)
    assert session.preference_bias["Sci-Fi"] == pytest.approx(-0.25)
    assert model.stats() == stats_before


def test_action_is_case_insensitive(service, session):
    outcome = service.apply_feedback(session, f"  {ALIEN.imdb_id} ", "LIKE")
    assert outcome.action == "like"
    assert outcome.imdb_id == ALIEN.imdb_id


@pytest.mark.parametrize("action, sign", [("like", 1), ("dislike", -1)])
def test_bias_stays_clamped(service, session, action, sign):
    for _ in range(20):
        service.apply_feedback(session, ALIEN.imdb_id, action)
    assert session.preference_bias["Sci-Fi"] == pytest.approx(sign * 2.0)
    others = {g: v for g, v in session.preference_bias.items() if g != "Sci-Fi"}
    assert set(others.values()) == {0.0}


@pytest.mark.parametrize(
    "imdb_id, action",
    [("", "like"), (ALIEN.imdb_id, ""), (ALIEN.imdb_id, "love"), (None, None)],
)
def test_malformed_feedback_is_rejected(service, session, imdb_id, action):
    with pytest.raises(InvalidFeedback) as exc:
        service.apply_feedback(session, imdb_id, action)
    assert exc.value.status == 400
    assert session.preference_bias == init_bias()


def test_feedback_without_run(service, model):
    session = make_session()
    stats_before = model.stats()
    with pytest.raises(NoActiveRun):
        service.apply_feedback(session, ALIEN.imdb_id, "like")
    assert session.preference_bias == init_bias()
    assert model.stats() == stats_before


def test_feedback_on_unknown_movie(service, model, session):
    stats_before = model.stats()
    with pytest.raises(MovieNotInRun) as exc:
        service.apply_feedback(session, "tt9999999", "like")
    assert exc.value.status == 404
    assert exc.value.code == "not_found"
    assert session.preference_bias == init_bias()
    assert model.stats() == stats_before


def test_malformed_check_runs_before_run_check(service):
    with pytest.raises(InvalidFeedback):
        service.apply_feedback(make_session(), "", "like")


def test_custom_step_and_bound(model, session):
    service = FeedbackService(model, step=1.5, bound=1.0)
    outcome = service.apply_feedback(session, ALIEN.imdb_id, "like")
    assert outcome.updated_bias["Sci-Fi"] == pytest.approx(1.0)


@pytest.mark.parametrize(
    "value, expected",
    [(3.0, 2.0), (-7.5, -2.0), (0.5, 0.5), (float("nan"), 0.0), (float("inf"), 0.0), ("x", 0.0)],
)
def test_clamp_bias(value, expected):
    assert clamp_bias(value) == expected


def test_nudge_creates_missing_genre():
    bias = {}
    nudge(bias, "Drama", 0.25)
    assert bias == {"Drama": 0.25}
