"""Machine-readable error codes reported by blob storage components."""

# Caller input
INVALID_ARGUMENT = "INVALID_ARGUMENT"
MISSING_REQUIRED_FIELD = "MISSING_REQUIRED_FIELD"
INVALID_BLOB_ID = "INVALID_BLOB_ID"
INVALID_BLOB_PREFIX = "INVALID_BLOB_PREFIX"
INVALID_SOURCE_STREAM = "INVALID_SOURCE_STREAM"
NAME_TOO_LONG = "NAME_TOO_LONG"

# Location
PATH_OUTSIDE_ROOT = "PATH_OUTSIDE_ROOT"
RESOURCE_NOT_FOUND = "RESOURCE_NOT_FOUND"
PATH_KIND_CONFLICT = "PATH_KIND_CONFLICT"

# Access
PERMISSION_DENIED = "PERMISSION_DENIED"
READ_ONLY_STORAGE = "READ_ONLY_STORAGE"

# Backing store
STORAGE_FULL = "STORAGE_FULL"
IO_FAILURE = "IO_FAILURE"
UNSUPPORTED_OPERATION = "UNSUPPORTED_OPERATION"
UNEXPECTED_EXCEPTION = "UNEXPECTED_EXCEPTION"
