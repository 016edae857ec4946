GENRE_LABELS = ("Sci-Fi", "Action", "Thriller", "Drama", "Mystery", "Romance")

# Tie-break order for the decision engine: first max wins.
GENRE_PRIORITY = ("Sci-Fi", "Action", "Thriller", "Mystery", "Drama", "Romance")

MAX_TOKENS = 120  # tokens kept per document

OMDB_BASE_URL = "https://www.omdbapi.com/"
OMDB_MAX_PAGES = 5
OMDB_CANDIDATE_CAP = 45

GITHUB_AUTHORIZE_URL = "https://github.com/login/oauth/authorize"
GITHUB_TOKEN_URL = "https://github.com/login/oauth/access_token"
GITHUB_USER_URL = "https://api.github.com/user"
GITHUB_USER_AGENT = "bioreel-movie-recommender"

BIAS_BOUND = 2.0
FEEDBACK_STEP = 0.25

limit_param = {"min": 1, "max": 10, "default": 10}
min_rating_param = {"min": 0.0, "max": 10.0, "default": 7.0}
