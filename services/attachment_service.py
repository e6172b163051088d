"""
Ticket attachment validation and the post-create upload loop.
"""
import logging
from collections import namedtuple

from api.client import ApiError
from config.constants import MAX_ATTACHMENT_BYTES

logger = logging.getLogger("TicketOps")

# `name`, `size` and `data` are what the form keeps for each picked file
AttachmentFile = namedtuple("AttachmentFile", ["name", "size", "data", "content_type"])


class UploadSummary:
    """Outcome of uploading a ticket's attachments one after another."""

    def __init__(self, succeeded: int = 0, failed: int = 0, failed_names: list = None):
        self.succeeded = succeeded
        self.failed = failed
        self.failed_names = failed_names or []

    @property
    def message(self) -> str:
        if self.failed:
            return f"Ticket created. {self.succeeded} file(s) uploaded, {self.failed} failed."
        return f"Ticket created with {self.succeeded} attachment(s)"

    def __repr__(self):
        return f"UploadSummary(succeeded={self.succeeded}, failed={self.failed})"


def format_file_size(size: int) -> str:
    if size < 1024:
        return f"{size} B"
    if size < 1024 * 1024:
        return f"{size / 1024:.1f} KB"
    return f"{size / (1024 * 1024):.1f} MB"


def validate_attachments(files) -> tuple:
    """
    Split picked files into accepted ones and rejection messages.

    Returns:
        (accepted files, list of error messages for oversized files)
    """
    accepted, errors = [], []
    for f in files or []:
        if f.size > MAX_ATTACHMENT_BYTES:
            errors.append(f"{f.name} is too large. Maximum size is 10MB.")
        else:
            accepted.append(f)
    return accepted, errors


def upload_attachments(ticket_id: str, files, upload) -> UploadSummary:
    """
    Upload files sequentially; one failure never stops the rest.

    Args:
        ticket_id: Ticket the files belong to
        files: AttachmentFile list
        upload: callable(ticket_id, filename, content, content_type)
    """
    summary = UploadSummary()
    for f in files:
        try:
            upload(ticket_id, f.name, f.data, f.content_type or "application/octet-stream")
            summary.succeeded += 1
        except ApiError as e:
            logger.warning(f"Failed to upload attachment {f.name} for ticket {ticket_id}: {e.message}")
            summary.failed += 1
            summary.failed_names.append(f.name)
    logger.info(f"Attachment upload for ticket {ticket_id}: {summary.succeeded} ok, {summary.failed} failed")
    return summary
