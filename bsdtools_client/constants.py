"""
Constants for the BSD Tools API client.
Values must match the remote API's wire contract exactly.
"""

# Protocol (api_ver=2 signing scheme)
API_VERSION = 2
AUTH_TYPE = "bsdtools_v2"
API_ROOT = "/page/api/"

# Query parameters injected by the signer
PARAM_API_ID = "api_id"
PARAM_API_TS = "api_ts"
PARAM_API_VER = "api_ver"
PARAM_API_MAC = "api_mac"
RESERVED_PARAMS = frozenset({PARAM_API_ID, PARAM_API_TS, PARAM_API_VER, PARAM_API_MAC})

# Deferred results
HTTP_ACCEPTED = 202
DEFERRED_RESULTS_PATH = "get_deferred_results"
DEFERRED_ID_PARAM = "deferred_id"

# Other constants
DEFAULT_MAX_ATTEMPTS = 20
DEFAULT_INTERVAL = 5  # seconds

# Default configuration values
DEFAULT_CONFIG = {
    'deferred_result_max_attempts': DEFAULT_MAX_ATTEMPTS,
    'deferred_result_interval': DEFAULT_INTERVAL,
    'timeout': 30,  # HTTP timeout in seconds
}
