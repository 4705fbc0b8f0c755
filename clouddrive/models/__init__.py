from clouddrive.models.time_mixin import TimeMixin
from clouddrive.models.entry import Entry

__all__ = [
    "TimeMixin",
    "Entry",
]

# Registered with Beanie at startup
DOCUMENT_MODELS = [Entry]
