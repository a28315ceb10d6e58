"""File Domain Module"""
from .entities.file_metadata import FileMetadata, ProcessingStatus
from .value_objects.s3_object_ref import InvalidS3EventError, S3ObjectRef
from .events.file_events import DomainEvent, FileProcessed, FileProcessingFailed

__all__ = [
    "FileMetadata",
    "ProcessingStatus",
    "S3ObjectRef",
    "InvalidS3EventError",
    "DomainEvent",
    "FileProcessed",
    "FileProcessingFailed",
]
