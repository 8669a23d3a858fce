"""Content-type detection for blob bytes.

Two capabilities live here:

- ``EncodingDetector`` guesses the encoding of bytes that are not valid
  UTF-8 and flags binary content (charset-normalizer does the guessing).
- ``TextClassifier`` answers ``is_text(path, content)``. The sync engine
  takes one as a constructor argument so tests and callers can swap in
  their own policy.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import PurePosixPath
from typing import Literal, Protocol, runtime_checkable

from charset_normalizer import from_bytes

from gitsift.core.logging import get_logger

log = get_logger("content.detect")

ContentType = Literal["text", "binary"]

# git's own heuristic: a NUL byte in the first 8000 bytes means binary
BINARY_PROBE_BYTES = 8000

_WIDE_ENCODINGS = ("utf_16", "utf_32")

BINARY_EXTENSIONS: frozenset[str] = frozenset(
    (
        # Archives
        ".tar", ".gz", ".tgz", ".bz2", ".xz", ".zip", ".rar", ".7z", ".jar", ".war",
        ".whl", ".egg", ".iso", ".dmg", ".deb", ".rpm", ".msi",
        # Native / bytecode
        ".dll", ".exe", ".pdb", ".so", ".dylib", ".a", ".o", ".obj", ".class", ".pyc",
        # Media
        ".jpg", ".jpeg", ".png", ".gif", ".ico", ".bmp", ".webp", ".mp3", ".mp4",
        ".avi", ".mov", ".webm", ".wav", ".ogg",
        # Fonts
        ".ttf", ".otf", ".woff", ".woff2", ".eot",
        # Documents
        ".pdf", ".doc", ".docx", ".xls", ".xlsx", ".ppt", ".pptx",
        # Databases
        ".sqlite", ".sqlite3", ".db",
    )
)  # fmt: skip


@dataclass(frozen=True, slots=True)
class Detection:
    """Best guess about a byte string."""

    encoding: str | None
    type: ContentType

    @property
    def is_binary(self) -> bool:
        return self.type == "binary"


class EncodingDetector:
    """Guesses ``(encoding, type)`` for raw bytes.

    The last answer is kept, so a classifier and a normalizer sharing one
    detector run charset-normalizer once per blob.
    """

    def __init__(self) -> None:
        self._last: tuple[bytes, Detection] | None = None

    def detect(self, data: bytes) -> Detection:
        if self._last is not None and self._last[0] == data:
            return self._last[1]
        detection = self._guess(data)
        self._last = (data, detection)
        return detection

    def _guess(self, data: bytes) -> Detection:
        best = from_bytes(data).best()
        if best is None:
            return Detection(encoding=None, type="binary")

        encoding = best.encoding
        if has_nul_bytes(data) and not encoding.startswith(_WIDE_ENCODINGS):
            return Detection(encoding=encoding, type="binary")
        return Detection(encoding=encoding, type="text")


def has_nul_bytes(data: bytes) -> bool:
    return b"\x00" in data[:BINARY_PROBE_BYTES]


@runtime_checkable
class TextClassifier(Protocol):
    """Decides whether a blob should be indexed as text."""

    def is_text(self, path: str, content: bytes | None) -> bool: ...


class HeuristicTextClassifier:
    """Extension list first, then NUL probe, then the encoding detector."""

    def __init__(self, detector: EncodingDetector | None = None) -> None:
        self._detector = detector or EncodingDetector()

    def is_text(self, path: str, content: bytes | None) -> bool:
        if PurePosixPath(path).suffix.lower() in BINARY_EXTENSIONS:
            return False
        if not content:
            return content is not None
        try:
            content.decode("utf-8")
        except UnicodeDecodeError:
            pass
        else:
            return not has_nul_bytes(content)
        try:
            detection = self._detector.detect(content)
        except Exception as e:  # noqa: BLE001
            # Let the normalizer turn it into a placeholder
            log.warning("content_detect_failed", path=path, error=str(e))
            return True
        return not detection.is_binary
