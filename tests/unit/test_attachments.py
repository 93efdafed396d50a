"""Tests for termchat.core.attachments."""

from __future__ import annotations

import base64
from pathlib import Path

import pytest

from termchat.core.attachments import attach_file, image_message, read_image_base64
from termchat.errors import AttachmentError


class TestAttachFile:
    def test_text_file(self, tmp_path: Path):
        path = tmp_path / "notes.md"
        path.write_text("# Notes\nline two\n")
        assert attach_file(path) == "# Notes\nline two\n"

    def test_office_document_is_base64(self, tmp_path: Path):
        path = tmp_path / "report.docx"
        path.write_bytes(b"PK\x03\x04binary")
        expected = base64.b64encode(b"PK\x03\x04binary").decode()
        assert attach_file(path) == f"[FILE {expected}]"

    def test_binary_non_office_file(self, tmp_path: Path):
        path = tmp_path / "blob.bin"
        path.write_bytes(b"\xff\xfe\x00\x81")
        with pytest.raises(AttachmentError):
            attach_file(path)

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(AttachmentError):
            attach_file(tmp_path / "absent.txt")


class TestImages:
    def test_read_image_base64(self, tmp_path: Path):
        path = tmp_path / "pic.jpg"
        path.write_bytes(b"\xff\xd8jpeg")
        assert base64.b64decode(read_image_base64(path)) == b"\xff\xd8jpeg"

    def test_image_message(self, tmp_path: Path):
        path = tmp_path / "pic.jpg"
        path.write_bytes(b"\xff\xd8jpeg")
        msg = image_message(path)
        assert msg.role == "user"
        text_part, image_part = msg.content
        assert text_part == {"type": "text", "text": "Photo attached by the user"}
        assert image_part["type"] == "image_url"
        assert image_part["image_url"]["url"].startswith("data:image/jpeg;base64,")
        assert image_part["image_url"]["detail"] == "high"

    def test_missing_image(self, tmp_path: Path):
        with pytest.raises(AttachmentError):
            image_message(tmp_path / "absent.jpg")
