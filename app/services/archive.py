"""Stream many ticket PNGs as a single ZIP archive."""

import zipfile
from typing import Iterable, Iterator

COMPRESS_LEVEL = 9


def archive_entry_name(code: str) -> str:
    return f"ticket_{code}.png"


class _ChunkSink:
    """Write-only file object that hands written bytes back in chunks.

    It has no ``tell``/``seek``, so ``zipfile`` treats it as unseekable and
    writes data descriptors after each member instead of patching headers.
    """

    def __init__(self):
        self._chunks: list[bytes] = []

    def write(self, data) -> int:
        self._chunks.append(bytes(data))
        return len(data)

    def flush(self) -> None:
        pass

    def drain(self) -> bytes:
        data = b"".join(self._chunks)
        self._chunks = []
        return data


def stream_archive(entries: Iterable[tuple[str, bytes]]) -> Iterator[bytes]:
    """
    Yield a ZIP archive built from ``(name, data)`` pairs.

    Each member is compressed and yielded as soon as it is pulled from
    ``entries``; the central directory is written once the iterable is
    exhausted. Only the current member is held by the archive machinery.
    """
    sink = _ChunkSink()
    with zipfile.ZipFile(
        sink, mode="w", compression=zipfile.ZIP_DEFLATED, compresslevel=COMPRESS_LEVEL
    ) as zf:
        for name, data in entries:
            zf.writestr(name, data)
            chunk = sink.drain()
            if chunk:
                yield chunk
    tail = sink.drain()
    if tail:
        yield tail
