"""Notification Publisher Interface (Port)"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from src.domain.files.events import DomainEvent


class INotificationPublisher(ABC):
    """
    Notification Publisher Interface

    処理結果のドメインイベントを外部に通知するための抽象インターフェース。
    具体的な実装（SQS等）はインフラ層で提供する。
    """

    @abstractmethod
    def publish(self, event: "DomainEvent") -> str:
        """イベントを発行し、メッセージIDを返す"""
        pass
