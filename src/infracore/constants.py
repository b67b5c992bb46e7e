"""Configuration constants for the infracore client.

Named constants for magic numbers and wire values shared across modules.
"""

# -----------------------------------------------------------------------------
# API
# -----------------------------------------------------------------------------

DEFAULT_ENDPOINT: str = "https://api.hetzner.cloud/v1"

DEFAULT_USER_AGENT: str = "infracore/0.1.0"

# -----------------------------------------------------------------------------
# Pagination Limits
# -----------------------------------------------------------------------------

# Page size used by all() when the caller does not specify one
DEFAULT_PAGE_SIZE: int = 50

# Maximum page size the API accepts
MAX_PAGE_SIZE: int = 50

# -----------------------------------------------------------------------------
# Transport
# -----------------------------------------------------------------------------

# Attempts for network errors and timeouts (tenacity stop_after_attempt)
DEFAULT_MAX_RETRIES: int = 3

# Maximum number of 429 responses honoured before giving up
MAX_RATE_LIMIT_RETRIES: int = 3

# Fallback wait when a 429 response carries no Retry-After header
DEFAULT_RETRY_AFTER: int = 5

# -----------------------------------------------------------------------------
# Actions
# -----------------------------------------------------------------------------

# Seconds between refreshes in ActionClient.wait_for
DEFAULT_POLL_INTERVAL: float = 0.5

# Upper bound of IDs accepted by the identifier resolver (signed 64-bit)
MAX_RESOURCE_ID: int = 2**63 - 1
