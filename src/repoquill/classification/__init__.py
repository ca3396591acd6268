from repoquill.classification.binary import BINARY_EXTENSIONS, is_binary
from repoquill.classification.classifier import PatternClassifier

__all__ = [
    "BINARY_EXTENSIONS",
    "PatternClassifier",
    "is_binary",
]
