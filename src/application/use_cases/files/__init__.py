"""File Use Cases"""
from .process_uploaded_file import (
    FileProcessingError,
    ProcessUploadedFileInput,
    ProcessUploadedFileOutput,
    ProcessUploadedFileUseCase,
)
from .get_file_metadata import (
    FileMetadataNotFoundError,
    GetFileMetadataInput,
    GetFileMetadataOutput,
    GetFileMetadataUseCase,
)

__all__ = [
    "ProcessUploadedFileUseCase",
    "ProcessUploadedFileInput",
    "ProcessUploadedFileOutput",
    "FileProcessingError",
    "GetFileMetadataUseCase",
    "GetFileMetadataInput",
    "GetFileMetadataOutput",
    "FileMetadataNotFoundError",
]
