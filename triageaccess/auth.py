"""API key handling, encapsulated in ``Auth``."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from typing import Dict, Optional

from .environment import Environment, get_environment
from .exceptions import LoginError

log = logging.getLogger(__name__)

API_KEY_VARIABLE = "TRIAGE_API_KEY"


@dataclass
class Auth:
    """Hold the API key and the deployment it belongs to."""

    api_key: Optional[str] = field(default=None, repr=False)
    environment: Environment = field(default_factory=get_environment)

    @property
    def authenticated(self) -> bool:
        return bool(self.api_key)

    @classmethod
    def from_environment(cls, environment: Optional[Environment] = None) -> "Auth":
        """Build an ``Auth`` from ``TRIAGE_API_KEY`` (and ``TRIAGE_ENVIRONMENT``).

        Raises:
            LoginError: ``TRIAGE_API_KEY`` is unset or empty.
        """
        api_key = os.environ.get(API_KEY_VARIABLE, "").strip()
        if not api_key:
            raise LoginError(f"{API_KEY_VARIABLE} is not set")
        log.debug("Using API key from %s", API_KEY_VARIABLE)
        return cls(api_key=api_key, environment=environment or get_environment())

    def get_headers(self) -> Dict[str, str]:
        """Return the headers that authenticate a request."""
        if not self.api_key:
            return {}
        return {"Authorization": f"Bearer {self.api_key}"}

    def logout(self) -> None:
        """Forget the API key."""
        self.api_key = None
