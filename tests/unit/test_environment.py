"""Tests for CI context resolution."""

from run_notifier.environment import get_project_name, get_run_url

GITHUB_ENV = {
    "GITHUB_SERVER_URL": "https://github.com",
    "GITHUB_REPOSITORY": "org/repo",
    "GITHUB_RUN_ID": "12345",
}


def test_run_url_from_github_context() -> None:
    """Composes the Actions run URL."""
    assert get_run_url(GITHUB_ENV) == "https://github.com/org/repo/actions/runs/12345"


def test_run_url_strips_trailing_slash() -> None:
    """Does not double the separator."""
    env = {**GITHUB_ENV, "GITHUB_SERVER_URL": "https://github.example/"}

    assert get_run_url(env) == "https://github.example/org/repo/actions/runs/12345"


def test_run_url_requires_all_variables() -> None:
    """Returns None when any variable is missing."""
    env = {k: v for k, v in GITHUB_ENV.items() if k != "GITHUB_RUN_ID"}

    assert get_run_url(env) is None
    assert get_run_url({}) is None


def test_project_name_prefers_configured_value() -> None:
    """The first configured name wins over the environment."""
    env = {"PROJECT_NAME": "from-env"}

    assert get_project_name([None, "configured", "other"], env) == "configured"
    assert get_project_name([None], env) == "from-env"
    assert get_project_name([], {}) is None
