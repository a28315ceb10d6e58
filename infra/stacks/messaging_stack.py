"""
Messaging Stack

SQS:
- Result Queue (Processor からの処理結果メッセージ)
- Dead Letter Queue
"""
from aws_cdk import (
    NestedStack,
    Duration,
    aws_sqs as sqs,
)
from constructs import Construct


class MessagingStack(NestedStack):
    """結果通知用 SQS リソースを管理するスタック。"""

    def __init__(self, scope: Construct, construct_id: str, **kwargs) -> None:
        super().__init__(scope, construct_id, **kwargs)

        # =================================================================
        # Dead Letter Queue
        # =================================================================

        self.result_dlq = sqs.Queue(
            self, 'ResultDeadLetterQueue',
            retention_period=Duration.days(14),
            enforce_ssl=True,
        )

        # =================================================================
        # Result Queue
        # =================================================================

        self.result_queue = sqs.Queue(
            self, 'ResultQueue',
            retention_period=Duration.days(4),
            enforce_ssl=True,
            dead_letter_queue=sqs.DeadLetterQueue(
                max_receive_count=5,
                queue=self.result_dlq,
            ),
        )
