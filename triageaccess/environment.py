"""Triage deployments a client can talk to."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from .exceptions import PreconditionError

ENVIRONMENT_VARIABLE = "TRIAGE_ENVIRONMENT"


@dataclass(frozen=True)
class Environment:
    """A Triage deployment.

    Attributes:
        name: Short identifier, also accepted in ``TRIAGE_ENVIRONMENT``.
        api_url: Base URL of the v0 API, with a trailing slash.
    """

    name: str
    api_url: str

    def url(self, path: str) -> str:
        """Join a relative endpoint path (no leading slash) onto the API base."""
        return self.api_url + path.lstrip("/")


PUBLIC = Environment("public", "https://api.tria.ge/v0/")
PRIVATE = Environment("private", "https://private.tria.ge/api/v0/")
RECORDED_FUTURE = Environment(
    "recorded_future", "https://sandbox.recordedfuture.com/api/v0/"
)
RECORDED_FUTURE_US = Environment(
    "recorded_future_us", "https://sandbox.us.recordedfuture.com/api/v0/"
)

ENVIRONMENTS = {
    env.name: env for env in (PUBLIC, PRIVATE, RECORDED_FUTURE, RECORDED_FUTURE_US)
}


def get_environment(name: Optional[str] = None) -> Environment:
    """Look up an environment by name, falling back to ``TRIAGE_ENVIRONMENT``.

    Parameters:
        name: Environment name; case and dashes are ignored. When ``None`` the
            ``TRIAGE_ENVIRONMENT`` variable is consulted, and ``PUBLIC`` is used
            if that is unset as well.

    Raises:
        PreconditionError: The name does not match a known environment.
    """
    if name is None:
        name = os.environ.get(ENVIRONMENT_VARIABLE, PUBLIC.name)
    key = name.strip().lower().replace("-", "_")
    try:
        return ENVIRONMENTS[key]
    except KeyError:
        known = ", ".join(sorted(ENVIRONMENTS))
        raise PreconditionError(
            f"Unknown Triage environment {name!r}, expected one of: {known}"
        ) from None
