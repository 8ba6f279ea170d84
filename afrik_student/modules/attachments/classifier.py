"""Map uploaded files and external URLs to an attachment type.

Rules are checked in order and the first match wins; anything unknown is
``other``.
"""

from typing import Optional, Union

from afrik_student.modules.attachments.models import AttachmentType, ExternalLinkType

WORD_EXTENSIONS = frozenset({"doc", "docx"})
EXCEL_EXTENSIONS = frozenset({"xls", "xlsx"})
POWERPOINT_EXTENSIONS = frozenset({"ppt", "pptx"})
ARCHIVE_EXTENSIONS = frozenset({"zip", "rar", "7z", "tar", "gz"})

# (substrings, type) in priority order
LINK_PATTERNS = (
    (("youtube.com", "youtu.be"), AttachmentType.youtube),
    (("drive.google.com",), AttachmentType.google_drive),
    (("tiktok.com",), AttachmentType.tiktok),
    (("vimeo.com",), AttachmentType.vimeo),
    (("dropbox.com",), AttachmentType.dropbox),
    (("onedrive.live.com", "1drv.ms"), AttachmentType.onedrive),
)


def classify_file(mime_type: Optional[str], extension: Optional[str]) -> AttachmentType:
    mime = (mime_type or "").lower()
    ext = (extension or "").lower().lstrip(".")

    if mime.startswith("video/"):
        return AttachmentType.video
    if mime.startswith("image/"):
        return AttachmentType.image
    if mime == "application/pdf":
        return AttachmentType.pdf
    if ext in WORD_EXTENSIONS or "word" in mime:
        return AttachmentType.word
    if ext in EXCEL_EXTENSIONS or "excel" in mime or "spreadsheet" in mime:
        return AttachmentType.excel
    if ext in POWERPOINT_EXTENSIONS or "powerpoint" in mime or "presentation" in mime:
        return AttachmentType.powerpoint
    if ext in ARCHIVE_EXTENSIONS or "zip" in mime or "compressed" in mime:
        return AttachmentType.archive
    return AttachmentType.other


def classify_link(url: str) -> AttachmentType:
    lowered = url.lower()
    for needles, attachment_type in LINK_PATTERNS:
        if any(needle in lowered for needle in needles):
            return attachment_type
    return AttachmentType.other


def resolve_link_type(
    url: str,
    explicit: Union[ExternalLinkType, AttachmentType, str, None] = None,
) -> AttachmentType:
    """Caller-supplied type wins over detection."""
    if explicit:
        return AttachmentType(getattr(explicit, "value", explicit))
    return classify_link(url)
