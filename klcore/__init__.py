"""String hashes, read-only file views and type-directed JSON conversion."""

__version__ = "0.1.0"
__all__ = ["hash", "file_view", "json_core", "json"]