"""triageaccess: A Python client for the Triage malware sandbox.

Quick Start:
    ```python
    import triageaccess

    # Authenticate with the API key from TRIAGE_API_KEY
    triageaccess.login()

    # Samples that completed during the first week of October
    entries = triageaccess.search_window(
        "family:emotet", "2023-10-01T00:00:00Z", "2023-10-08T00:00:00Z"
    )

    # Reports
    overview = triageaccess.get_triage_overview(entries[0].id)
    ```

Main Functions:
    - `login()`: Create the client used by the module-level functions
    - `search()`: Lazily page through every matching sample
    - `search_window()`: Matching samples that completed inside a time window
    - `get_triage_report()`, `get_static_report()`, `get_triage_overview()`

The `triageaccess.search` attribute is the `search()` function. Import the
search building blocks from the subpackage instead:
`from triageaccess.search import SearchQuery, windowed_search`.
"""

import logging
from importlib.metadata import PackageNotFoundError, version

# must precede .api; search is rebound to the api function
from .search import SearchQuery, SearchResults, windowed_search  # isort: skip
from .api import (
    get_sample,
    get_static_report,
    get_triage_overview,
    get_triage_report,
    login,
    logout,
    search,
    search_window,
)
from .auth import Auth
from .cache import KnownValuesCache
from .client import TriageClient
from .environment import (
    PRIVATE,
    PUBLIC,
    RECORDED_FUTURE,
    RECORDED_FUTURE_US,
    Environment,
    get_environment,
)
from .exceptions import (
    LoginError,
    MalformedInputError,
    PreconditionError,
    TransportError,
    TriageError,
)

logger = logging.getLogger(__name__)

__all__ = [
    # api.py
    "login",
    "logout",
    "search",
    "search_window",
    "get_sample",
    "get_triage_report",
    "get_static_report",
    "get_triage_overview",
    # client.py
    "TriageClient",
    "KnownValuesCache",
    # auth.py
    "Auth",
    # environment.py
    "Environment",
    "get_environment",
    "PUBLIC",
    "PRIVATE",
    "RECORDED_FUTURE",
    "RECORDED_FUTURE_US",
    # search
    "SearchQuery",
    "SearchResults",
    "windowed_search",
    # exceptions.py
    "TriageError",
    "LoginError",
    "MalformedInputError",
    "PreconditionError",
    "TransportError",
]

try:
    __version__ = version("triageaccess")
except PackageNotFoundError:
    __version__ = "0.0.0"
