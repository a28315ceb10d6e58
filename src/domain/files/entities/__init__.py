"""File Entities"""
from .file_metadata import FileMetadata, ProcessingStatus

__all__ = ["FileMetadata", "ProcessingStatus"]
