"""Turn raw blob bytes into text that is safe to index.

UTF-8 input passes through untouched. Anything else is run through the
encoding detector: binary content is reported as not indexable, other
content is decoded under the detected encoding and cleaned until it is
valid UTF-8. A failure anywhere in that fallback never escapes; the
content becomes a ``--broken encoding`` placeholder instead.
"""

from __future__ import annotations

from dataclasses import dataclass

from gitsift.content.detect import Detection, EncodingDetector
from gitsift.core.logging import get_logger

log = get_logger("content.normalizer")

BROKEN_ENCODING_TEMPLATE = "--broken encoding: {encoding}"


@dataclass(frozen=True, slots=True)
class NormalizedContent:
    """Result of normalizing one blob."""

    text: str | None
    encoding: str | None = "utf-8"
    binary: bool = False

    @property
    def indexable(self) -> bool:
        return not self.binary and self.text is not None


def broken_encoding(encoding: str | None) -> str:
    return BROKEN_ENCODING_TEMPLATE.format(encoding=encoding or "unknown")


class ContentNormalizer:
    """Classifies and cleans raw byte content before indexing."""

    def __init__(self, detector: EncodingDetector | None = None) -> None:
        self._detector = detector or EncodingDetector()

    def normalize(self, data: bytes | None) -> NormalizedContent:
        if not isinstance(data, bytes | bytearray | memoryview):
            return NormalizedContent(text=None, encoding=None)

        raw = bytes(data)
        try:
            return NormalizedContent(text=raw.decode("utf-8"))
        except UnicodeDecodeError:
            pass

        detection: Detection | None = None
        try:
            detection = self._detector.detect(raw)
            if detection.is_binary:
                return NormalizedContent(text=None, encoding=detection.encoding, binary=True)
            return NormalizedContent(
                text=_clean(raw, detection.encoding), encoding=detection.encoding
            )
        except Exception as e:  # noqa: BLE001
            encoding = detection.encoding if detection else None
            log.warning("content_normalize_failed", encoding=encoding or "unknown", error=str(e))
            return NormalizedContent(text=broken_encoding(encoding), encoding=encoding)


def _clean(raw: bytes, encoding: str | None) -> str:
    """Decode lossily and round-trip through UTF-16, dropping what does not survive."""
    text = raw.decode(encoding or "utf-8", errors="ignore")
    text = text.encode("utf-16-be", errors="ignore").decode("utf-16-be", errors="ignore")
    return text.replace("\x00", "")
