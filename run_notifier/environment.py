"""CI context read from the environment."""

import os
from collections.abc import Mapping, Sequence

RUN_URL_VARIABLES = ("GITHUB_SERVER_URL", "GITHUB_REPOSITORY", "GITHUB_RUN_ID")
PROJECT_NAME_VARIABLE = "PROJECT_NAME"


def get_run_url(environ: Mapping[str, str] | None = None) -> str | None:
    """Compose the CI run URL, or None outside of GitHub Actions.

    All of GITHUB_SERVER_URL, GITHUB_REPOSITORY and GITHUB_RUN_ID must be set.
    """
    env = os.environ if environ is None else environ
    server_url, repository, run_id = (env.get(name) for name in RUN_URL_VARIABLES)
    if not (server_url and repository and run_id):
        return None
    return f"{server_url.rstrip('/')}/{repository}/actions/runs/{run_id}"


def get_project_name(
    configured: Sequence[str | None] = (),
    environ: Mapping[str, str] | None = None,
) -> str | None:
    """Return the first configured project name, else PROJECT_NAME."""
    for name in configured:
        if name:
            return name
    env = os.environ if environ is None else environ
    return env.get(PROJECT_NAME_VARIABLE) or None
