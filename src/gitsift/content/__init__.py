"""Blob content classification and normalization."""

from gitsift.content.detect import (
    BINARY_EXTENSIONS,
    Detection,
    EncodingDetector,
    HeuristicTextClassifier,
    TextClassifier,
)
from gitsift.content.normalizer import (
    BROKEN_ENCODING_TEMPLATE,
    ContentNormalizer,
    NormalizedContent,
    broken_encoding,
)

__all__ = [
    "BINARY_EXTENSIONS",
    "BROKEN_ENCODING_TEMPLATE",
    "ContentNormalizer",
    "Detection",
    "EncodingDetector",
    "HeuristicTextClassifier",
    "NormalizedContent",
    "TextClassifier",
    "broken_encoding",
]
