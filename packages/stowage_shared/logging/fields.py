"""Canonical logging field names for cross-component consistency.

These constants define a stable key set for structured logs and context
propagation.
"""

TIMESTAMP = "timestamp"
LEVEL = "level"
LOGGER = "logger"
MESSAGE = "message"
EVENT = "event"

# Public API invocation fields.
COMPONENT_ID = "component_id"
API_NAME = "api_name"
PUBLIC_API_INVOCATION_EVENT = "public_api_invocation"
PUBLIC_API_COMPLETION_EVENT = "public_api_completion"
SUCCESS = "success"
DURATION_MS = "duration_ms"
ERRORS = "errors"
ERROR_CATEGORY = "error_category"

# Blob storage fields.
ROOT_DIR = "root_dir"
BLOB_ID = "blob_id"
FOLDER_PATH = "folder_path"

# Common service-level fields.
SERVICE = "service"
ENVIRONMENT = "environment"
