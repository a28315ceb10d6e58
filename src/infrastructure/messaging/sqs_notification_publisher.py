"""SQS Notification Publisher Implementation"""
from __future__ import annotations

from typing import TYPE_CHECKING, Any

import boto3
import structlog
from botocore.exceptions import ClientError

from src.application.ports import INotificationPublisher

if TYPE_CHECKING:
    from src.domain.files.events import DomainEvent

logger = structlog.get_logger()


class NotificationPublishError(Exception):
    """結果メッセージの送信エラー"""

    pass


class SqsNotificationPublisher(INotificationPublisher):
    """
    SQS ベースの Notification Publisher

    イベント本文は JSON、種別・ステータス・ファイルIDはメッセージ属性として付与する。
    """

    def __init__(
        self,
        queue_url: str,
        region: str | None = None,
        client: Any = None,
    ):
        if not queue_url:
            raise ValueError("queue_url is required")

        self.queue_url = queue_url
        self._sqs = client or boto3.client("sqs", region_name=region)

    def publish(self, event: "DomainEvent") -> str:
        """イベントを送信"""
        log = logger.bind(
            event_type=event.event_type,
            event_id=str(event.event_id),
        )

        try:
            response = self._sqs.send_message(
                QueueUrl=self.queue_url,
                MessageBody=event.to_message(),
                MessageAttributes=self._build_attributes(event),
            )
        except ClientError as e:
            log.error(
                "publish_notification_failed",
                error_code=e.response.get("Error", {}).get("Code"),
            )
            raise NotificationPublishError(
                f"Failed to send {event.event_type} message: {e}"
            ) from e

        message_id = response["MessageId"]
        log.info("notification_published", message_id=message_id)
        return message_id

    @staticmethod
    def _build_attributes(event: "DomainEvent") -> dict[str, dict[str, str]]:
        """メッセージ属性を作成"""
        attributes = {
            "eventType": {"DataType": "String", "StringValue": event.event_type},
        }
        for name, attr in (("fileId", "file_id"), ("status", "status")):
            value = getattr(event, attr, "")
            if value:
                attributes[name] = {"DataType": "String", "StringValue": str(value)}
        return attributes
