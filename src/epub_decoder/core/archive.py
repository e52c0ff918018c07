"""Streaming access to archive entries."""

import io
import zipfile
import zlib

from epub_decoder.exceptions import ArchiveReadError, FileNotFound

# Errors zipfile raises for truncated, corrupted or unsupported entries
READ_ERRORS = (
    zipfile.BadZipFile,
    zlib.error,
    EOFError,
    OSError,
    RuntimeError,
    NotImplementedError,
)


class ArchiveEntry(io.RawIOBase):
    """Readable stream over one archive entry.

    Decompresses incrementally and reports read failures as ArchiveReadError.
    """

    def __init__(self, raw: zipfile.ZipExtFile, name: str):
        super().__init__()
        self._raw = raw
        self.name = name

    def readable(self) -> bool:
        return True

    def readinto(self, buffer) -> int:
        try:
            return self._raw.readinto(buffer)
        except READ_ERRORS as e:
            raise ArchiveReadError(f"Could not read {self.name}: {e}") from e

    def close(self) -> None:
        if not self.closed:
            self._raw.close()
        super().close()


def open_entry(archive: zipfile.ZipFile, name: str) -> ArchiveEntry:
    """Open an archive entry by its exact name.

    Raises:
        FileNotFound: If the archive has no such entry
        ArchiveReadError: If the archive is closed or the entry header is corrupt
    """
    if archive.fp is None:
        raise ArchiveReadError(f"Could not open {name}: archive is closed")
    try:
        info = archive.getinfo(name)
    except KeyError:
        raise FileNotFound(name) from None
    try:
        raw = archive.open(info)
    except READ_ERRORS as e:
        raise ArchiveReadError(f"Could not open {name}: {e}") from e
    return ArchiveEntry(raw, name)
