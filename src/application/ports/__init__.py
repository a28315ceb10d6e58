"""Application Ports (Interfaces)"""
from .repositories import IFileMetadataRepository
from .event_publisher import INotificationPublisher

__all__ = [
    "IFileMetadataRepository",
    "INotificationPublisher",
]
