"""Tests for the streaming ZIP archive."""

import zipfile
from io import BytesIO

from app.services.archive import archive_entry_name, stream_archive


def _entries(codes):
    return [(archive_entry_name(c), f"png-bytes-{c}".encode() * 50) for c in codes]


class TestStreamArchive:
    def test_members_and_contents(self):
        entries = _entries(["GAL-10001", "GAL-10002", "GAL-10003"])

        data = b"".join(stream_archive(entries))

        with zipfile.ZipFile(BytesIO(data)) as zf:
            assert zf.testzip() is None
            assert zf.namelist() == [
                "ticket_GAL-10001.png",
                "ticket_GAL-10002.png",
                "ticket_GAL-10003.png",
            ]
            for name, payload in entries:
                assert zf.read(name) == payload
                assert zf.getinfo(name).compress_type == zipfile.ZIP_DEFLATED

    def test_single_entry(self):
        data = b"".join(stream_archive(_entries(["GAL-55555"])))
        with zipfile.ZipFile(BytesIO(data)) as zf:
            assert zf.namelist() == ["ticket_GAL-55555.png"]

    def test_empty_archive_is_valid(self):
        data = b"".join(stream_archive([]))
        with zipfile.ZipFile(BytesIO(data)) as zf:
            assert zf.namelist() == []

    def test_yields_incrementally(self):
        """Each member is emitted before the next one is requested."""
        pulled = []

        def lazy_entries():
            for name, payload in _entries(["GAL-10001", "GAL-10002"]):
                pulled.append(name)
                yield name, payload

        stream = stream_archive(lazy_entries())
        first = next(stream)

        assert pulled == ["ticket_GAL-10001.png"]
        assert first.startswith(b"PK\x03\x04")
        rest = b"".join(stream)
        assert pulled == ["ticket_GAL-10001.png", "ticket_GAL-10002.png"]
        # Trailer (end of central directory) only at the end
        assert b"PK\x05\x06" not in first
        assert b"PK\x05\x06" in rest

    def test_entry_name(self):
        assert archive_entry_name("GAL-12345") == "ticket_GAL-12345.png"
