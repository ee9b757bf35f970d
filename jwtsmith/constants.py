"""Default values shared across jwtsmith."""

DEFAULT_ISSUER = "jwtsmith"
DEFAULT_SUBJECT = "anonymous"
DEFAULT_AUDIENCE = DEFAULT_ISSUER
DEFAULT_JSON_CODEC = "json"

# Times are integer milliseconds since the Unix epoch.
DEFAULT_TTL_MS = 2 * 60 * 60 * 1000
DEFAULT_NOT_BEFORE_SKEW_MS = 100

TOKEN_TYPE = "JWT"
