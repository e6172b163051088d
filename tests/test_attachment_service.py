from unittest.mock import MagicMock

from api.client import ApiError
from services.attachment_service import (
    AttachmentFile,
    UploadSummary,
    format_file_size,
    upload_attachments,
    validate_attachments,
)

MB = 1024 * 1024


def attachment(name, size=100):
    return AttachmentFile(name, size, b"x" * min(size, 10), "image/png")


def test_oversized_files_rejected():
    accepted, errors = validate_attachments([attachment("small.png"), attachment("huge.mp4", 11 * MB),
                                             attachment("edge.png", 10 * MB)])
    assert [f.name for f in accepted] == ["small.png", "edge.png"]
    assert errors == ["huge.mp4 is too large. Maximum size is 10MB."]


def test_validate_nothing_picked():
    assert validate_attachments(None) == ([], [])


def test_upload_continues_after_failure():
    upload = MagicMock(side_effect=[None, ApiError("Disk full", 500), None])
    files = [attachment("a.png"), attachment("b.png"), attachment("c.png")]

    summary = upload_attachments("t-1", files, upload)

    assert upload.call_count == 3
    assert (summary.succeeded, summary.failed) == (2, 1)
    assert summary.failed_names == ["b.png"]
    assert summary.message == "Ticket created. 2 file(s) uploaded, 1 failed."


def test_upload_passes_content_type():
    upload = MagicMock()
    upload_attachments("t-1", [AttachmentFile("notes.txt", 4, b"data", None)], upload)
    upload.assert_called_once_with("t-1", "notes.txt", b"data", "application/octet-stream")


def test_all_uploaded_message():
    assert UploadSummary(succeeded=3).message == "Ticket created with 3 attachment(s)"


def test_format_file_size():
    assert format_file_size(512) == "512 B"
    assert format_file_size(2048) == "2.0 KB"
    assert format_file_size(3 * MB) == "3.0 MB"
