"""Configuration for the generic webhook channel."""

import os
from collections.abc import Mapping
from typing import ClassVar, Literal

from run_notifier.models.config import NotificationConfig

TOKEN_ENV = "WEBHOOK_TOKEN"


class WebhookConfig(NotificationConfig):
    """Configuration for a generic JSON webhook.

    Headers from options.headers are merged over the defaults.
    """

    webhook_url_env: ClassVar[str | None] = "WEBHOOK_URL"

    type: Literal["webhook"] = "webhook"
    event: str = "test_completed"

    def resolve_headers(
        self, environ: Mapping[str, str] | None = None
    ) -> Mapping[str, str]:
        """Content type, then the bearer token from WEBHOOK_TOKEN, then custom headers."""
        env = os.environ if environ is None else environ
        headers = {"Content-Type": "application/json"}
        if token := env.get(TOKEN_ENV):
            headers["Authorization"] = f"Bearer {token}"
        headers.update(self.options.headers)
        return headers
