# afrik_student/core/content_constants.py
"""Constants for lesson attachment uploads"""

# Storage namespace for uploaded lesson files
LESSON_ATTACHMENTS_PREFIX = "lessons/attachments"

# Accepted upload extensions, grouped by family
VIDEO_EXTENSIONS = {"mp4", "avi", "mov", "wmv", "flv", "mkv", "webm"}
DOCUMENT_EXTENSIONS = {"pdf"}
OFFICE_EXTENSIONS = {"doc", "docx", "xls", "xlsx", "ppt", "pptx"}
ARCHIVE_EXTENSIONS = {"zip", "rar", "7z", "tar", "gz"}
IMAGE_EXTENSIONS = {"jpg", "jpeg", "png", "gif", "webp", "svg"}

ALLOWED_UPLOAD_EXTENSIONS = frozenset(
    VIDEO_EXTENSIONS
    | DOCUMENT_EXTENSIONS
    | OFFICE_EXTENSIONS
    | ARCHIVE_EXTENSIONS
    | IMAGE_EXTENSIONS
)
