from enum import Enum

class EntryKind(str, Enum):
    FILE = "file"
    FOLDER = "folder"
