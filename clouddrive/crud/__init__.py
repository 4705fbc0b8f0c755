from clouddrive.crud.entry import EntryCRUD, EntryStore

__all__ = ["EntryCRUD", "EntryStore"]
