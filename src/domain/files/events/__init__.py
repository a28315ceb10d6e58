"""File Domain Events"""
from .file_events import DomainEvent, FileProcessed, FileProcessingFailed

__all__ = ["DomainEvent", "FileProcessed", "FileProcessingFailed"]
