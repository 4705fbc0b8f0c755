from typing import Iterable, Optional

from clouddrive.consts.file_category import FileCategory


class FileClassifier:
    """Maps a MIME type to a storage category.

    Membership lists are exact MIME strings; documents are tested first,
    then images, then videos.
    """

    def __init__(
        self,
        document_types: Iterable[str],
        image_types: Iterable[str],
        video_types: Iterable[str],
    ):
        self._lists = (
            (FileCategory.DOCUMENTS, frozenset(document_types)),
            (FileCategory.IMAGES, frozenset(image_types)),
            (FileCategory.VIDEOS, frozenset(video_types)),
        )

    @classmethod
    def from_settings(cls, settings=None) -> "FileClassifier":
        if settings is None:
            from clouddrive.configs.settings import settings
        return cls(
            document_types=settings.STORAGE_DOCUMENT_TYPES,
            image_types=settings.STORAGE_IMAGE_TYPES,
            video_types=settings.STORAGE_VIDEO_TYPES,
        )

    def classify(self, mime_type: Optional[str]) -> FileCategory:
        if not mime_type:
            return FileCategory.OTHERS
        for category, types in self._lists:
            if mime_type in types:
                return category
        return FileCategory.OTHERS
