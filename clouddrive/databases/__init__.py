from clouddrive.databases.mongodb import MongoDB, mongodb

__all__ = ["MongoDB", "mongodb"]
