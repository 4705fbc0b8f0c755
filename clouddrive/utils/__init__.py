from clouddrive.utils.logging import get_logger, setup_logging
from clouddrive.utils.api_response import ok, created, listed
from clouddrive.utils.file_classifier import FileClassifier


__all__ = [
    "get_logger",
    "setup_logging",
    "ok",
    "created",
    "listed",
    "FileClassifier",
]
