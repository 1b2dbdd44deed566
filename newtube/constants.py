"""Application constants - centralized configuration values."""

# =============================================================================
# Pagination
# =============================================================================
DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100

# =============================================================================
# Cache TTLs (in seconds)
# =============================================================================
CACHE_TTL_CATEGORIES = 300  # 5 minutes

# =============================================================================
# API Timeouts (in seconds)
# =============================================================================
API_TIMEOUT_EXTERNAL = 15.0
API_TIMEOUT_UPLOAD = 60.0  # Copying images between services

# =============================================================================
# Webhooks
# =============================================================================
WEBHOOK_TOLERANCE_SECONDS = 300  # Max clock skew for signed webhook timestamps

# =============================================================================
# Media pipeline
# =============================================================================
MUX_API_URL = "https://api.mux.com"
MUX_IMAGE_URL = "https://image.mux.com"
VIDEO_DEFAULT_TITLE = "Untitled"
VIDEO_UPLOAD_STATUS = "waiting"

# =============================================================================
# Background workflows
# =============================================================================
WORKFLOW_RETRIES = 3
THUMBNAIL_PROMPT_MIN_LENGTH = 10

# =============================================================================
# Thumbnails
# =============================================================================
THUMBNAIL_MAX_BYTES = 4 * 1024 * 1024  # 4MB
THUMBNAIL_CONTENT_TYPES = ("image/png", "image/jpeg", "image/webp", "image/gif")
