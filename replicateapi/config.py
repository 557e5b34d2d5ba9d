"""
Configuration module for the Replicate API client.

This module centralizes all configuration constants and default values
used throughout the package.

IMPORTANT: This module should ONLY import from the standard library and typing.
Do not import from project modules to avoid circular dependencies.
All project modules can safely import from this config.
"""

# =============================================================================
# API Configuration
# =============================================================================

API_BASE_URL = "https://api.replicate.com"
API_VERSION = "v1"

DEFAULT_TIMEOUT = 30.0  # seconds, per request

# The API accepts "Token <token>" for HTTP auth; raw tokens are rejected.
AUTH_SCHEME = "Token"
CONTENT_TYPE_JSON = "application/json"

# =============================================================================
# Endpoint Paths (relative to API_BASE_URL/API_VERSION)
# =============================================================================

PREDICTIONS_PATH = "/predictions"
PREDICTION_PATH = "/predictions/{prediction_id}"
MODEL_VERSIONS_PATH = "/models/{owner}/{model}/versions"

# =============================================================================
# Environment Variables
# =============================================================================

ENV_API_TOKEN = "REPLICATE_API_TOKEN"
ENV_BASE_URL = "REPLICATE_API_BASE_URL"

# =============================================================================
# Prediction Status Values
# =============================================================================

STATUS_STARTING = "starting"
STATUS_PROCESSING = "processing"
STATUS_SUCCEEDED = "succeeded"
STATUS_FAILED = "failed"
STATUS_CANCELED = "canceled"

TERMINAL_STATUSES = frozenset([STATUS_SUCCEEDED, STATUS_FAILED, STATUS_CANCELED])

# =============================================================================
# CLI Configuration
# =============================================================================

DEFAULT_POLL_INTERVAL = 1.0  # seconds between refreshes with --wait
DEFAULT_WAIT_TIMEOUT = 600.0

# =============================================================================
# Logging Configuration
# =============================================================================

DEFAULT_LOGGER_NAME = 'replicateapi'
