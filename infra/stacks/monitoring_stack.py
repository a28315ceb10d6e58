"""
Monitoring Stack

CloudWatch + SNS:
- Alert Topic
- Processor Errors Alarm
- Ingest DLQ Depth Alarm
"""
from aws_cdk import (
    NestedStack,
    Duration,
    aws_cloudwatch as cloudwatch,
    aws_cloudwatch_actions as cw_actions,
    aws_lambda as lambda_,
    aws_sns as sns,
    aws_sqs as sqs,
)
from constructs import Construct


class MonitoringStack(NestedStack):
    """エラー監視リソースを管理するスタック。"""

    def __init__(
        self,
        scope: Construct,
        construct_id: str,
        processor_fn: lambda_.IFunction,
        ingest_dlq: sqs.IQueue,
        **kwargs
    ) -> None:
        super().__init__(scope, construct_id, **kwargs)

        # =================================================================
        # Alert Topic
        # =================================================================

        self.alert_topic = sns.Topic(
            self, 'AlertTopic',
            display_name='File Pipeline Alerts',
        )
        alert_action = cw_actions.SnsAction(self.alert_topic)

        # =================================================================
        # Alarms
        # =================================================================

        # Processor のエラー (ハンドラ外の例外・タイムアウト)
        self.processor_errors_alarm = cloudwatch.Alarm(
            self, 'ProcessorErrorsAlarm',
            alarm_description='File processor Lambda reported errors',
            metric=processor_fn.metric_errors(period=Duration.minutes(5)),
            threshold=1,
            evaluation_periods=1,
            comparison_operator=cloudwatch.ComparisonOperator.GREATER_THAN_OR_EQUAL_TO_THRESHOLD,
            treat_missing_data=cloudwatch.TreatMissingData.NOT_BREACHING,
        )
        self.processor_errors_alarm.add_alarm_action(alert_action)

        # 処理できなかった通知が DLQ に滞留
        self.dlq_depth_alarm = cloudwatch.Alarm(
            self, 'IngestDlqDepthAlarm',
            alarm_description='Upload notifications landed in the ingest dead-letter queue',
            metric=ingest_dlq.metric_approximate_number_of_messages_visible(
                period=Duration.minutes(5),
            ),
            threshold=1,
            evaluation_periods=1,
            comparison_operator=cloudwatch.ComparisonOperator.GREATER_THAN_OR_EQUAL_TO_THRESHOLD,
            treat_missing_data=cloudwatch.TreatMissingData.NOT_BREACHING,
        )
        self.dlq_depth_alarm.add_alarm_action(alert_action)
