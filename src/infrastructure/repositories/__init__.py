"""Repository Implementations"""
from .dynamodb_file_metadata_repository import (
    DynamoDBFileMetadataRepository,
    MetadataRepositoryError,
)

__all__ = ["DynamoDBFileMetadataRepository", "MetadataRepositoryError"]
