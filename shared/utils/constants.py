"""Application constants - all magic numbers centralized."""

# Latency simulation (jitter), milliseconds
MIN_LATENCY_MS = 300  # inclusive
MAX_LATENCY_MS = 1500  # exclusive

# Chaos injection - cutpoints are cumulative on a single draw
UPSTREAM_FAILURE_RATE = 0.10  # r < 0.10 -> 500
AUTH_FAILURE_RATE = 0.10  # 0.10 <= r < 0.20 -> 401
# r >= 0.20 -> real lookup (80%)

# HTTP-style status codes carried in envelopes
STATUS_OK = 200
STATUS_UNAUTHORIZED = 401
STATUS_NOT_FOUND = 404
STATUS_INTERNAL_ERROR = 500

# Fixed failure messages and troubleshooting suggestions
UPSTREAM_FAILURE_MESSAGE = "Internal Server Error - Database timeout"
UPSTREAM_FAILURE_SUGGESTION = "Check database connectivity or retry."
AUTH_FAILURE_MESSAGE = "Unauthorized - Invalid API Token"
AUTH_FAILURE_SUGGESTION = "Refresh session or check API keys."
NOT_FOUND_MESSAGE_TEMPLATE = "Lesson with ID '{lesson_id}' not found"
NOT_FOUND_SUGGESTION = "Verify the Lesson ID in the URL/Configuration."

# Trace ids
REQUEST_ID_PREFIX = "req_"
REQUEST_ID_TOKEN_LENGTH = 12

# Request log
MAX_REQUEST_LOG_ENTRIES = 500

# Default lesson shown by the lesson view
DEFAULT_LESSON_ID = "a1-lesson-001-hallo"
