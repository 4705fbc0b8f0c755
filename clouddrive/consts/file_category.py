from enum import Enum

class FileCategory(str, Enum):
    DOCUMENTS = "documents"
    IMAGES = "images"
    VIDEOS = "videos"
    OTHERS = "others"
