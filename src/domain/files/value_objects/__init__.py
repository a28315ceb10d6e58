"""File Value Objects"""
from .s3_object_ref import InvalidS3EventError, S3ObjectRef

__all__ = ["S3ObjectRef", "InvalidS3EventError"]
