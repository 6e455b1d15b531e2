"""Constants used throughout the application."""

# File size limits
MAX_FILE_SIZE = 10 * 1024 * 1024  # 10MB in bytes
READ_CHUNK_SIZE = 1024 * 1024

# Upload form and public paths
UPLOAD_FIELD_NAME = "image"
UPLOAD_URL_PREFIX = "/uploads"
FILENAME_SEPARATOR = "-"
URL_UNSAFE_CHARACTERS = "?#%"

# Extensions returned by the listing endpoint
LISTABLE_IMAGE_EXTENSIONS = (".jpg", ".jpeg", ".png", ".gif")

# Formats accepted when content verification is enabled
JPEG_FORMAT = "JPEG"
PNG_FORMAT = "PNG"
GIF_FORMAT = "GIF"
VERIFIABLE_IMAGE_FORMATS = (JPEG_FORMAT, PNG_FORMAT, GIF_FORMAT)

# Rate limiting constants
UPLOAD_RATE_LIMIT = "100/15 minutes"

# Server defaults
DEFAULT_PORT = 3001
DEFAULT_HOST = "0.0.0.0"  # noqa: S104
DEFAULT_UPLOAD_DIR = "uploads"
PRODUCTION_ENV = "production"

# Error messages
ERROR_NO_FILE = "No file uploaded."
ERROR_INVALID_FILENAME = "Invalid file name."
ERROR_FILE_TOO_LARGE = "File too large. Maximum allowed size is 10MB."
ERROR_UNSUPPORTED_FORMAT = "Unsupported image format. Only JPEG, PNG and GIF are supported."
ERROR_RATE_LIMITED = "Too many uploads from this address, please try again after 15 minutes."
ERROR_STORE_FAILED = "Failed to store image."
ERROR_LIST_FAILED = "Failed to retrieve images."
ERROR_NOT_FOUND = "Not found."
ERROR_INVALID_REQUEST = "Invalid request."
ERROR_INTERNAL = "Internal server error."

# Application settings
APP_TITLE = "webcam-uploads - Webcam Capture Storage"
APP_DESCRIPTION = "Stores still images captured by the webcam client and lists them"
APP_VERSION = "1.0.0"
