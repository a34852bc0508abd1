"""Shared GitHub API constants.

This module centralizes URLs, media types, environment variable names and
header names so the client and resource modules stay small and focused.
"""

from __future__ import annotations

API_URL = "https://api.github.com"

# Accept media types: v3 stable vs. the preview API
STABLE_MEDIA_TYPE = "application/vnd.github.v3+json"
PREVIEW_MEDIA_TYPE = "application/vnd.github.korra-preview"

# Environment variables
TOKEN_ENV = "GITHUB_TOKEN"
CACHE_FILE_ENV = "GITHUB_CACHE_FILE"
API_URL_ENV = "GITHUB_API_URL"
HTTP_TIMEOUT_ENV = "GITHUB_HTTP_TIMEOUT"

DEFAULT_CACHE_FILE = ".github-cache"
DEFAULT_HTTP_TIMEOUT = 30.0

# Response headers
ETAG_HEADER = "ETag"
LAST_MODIFIED_HEADER = "Last-Modified"
LINK_HEADER = "Link"
RETRY_AFTER_HEADER = "Retry-After"
RATE_LIMIT_REMAINING_HEADER = "X-RateLimit-Remaining"
RATE_LIMIT_LIMIT_HEADER = "X-RateLimit-Limit"

# Request headers
IF_NONE_MATCH_HEADER = "If-None-Match"
IF_MODIFIED_SINCE_HEADER = "If-Modified-Since"

# Returned by the rate-limit probe when a count cannot be read
RATE_LIMIT_UNKNOWN = -1

NOT_AVAILABLE = "<n/a>"
