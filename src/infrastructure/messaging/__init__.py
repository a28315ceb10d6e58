"""Messaging Implementations"""
from .sqs_notification_publisher import NotificationPublishError, SqsNotificationPublisher

__all__ = ["SqsNotificationPublisher", "NotificationPublishError"]
