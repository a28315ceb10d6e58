"""
Lambda Stack (Serverless Compute)

Lambda Functions:
- File Processor (Ingest Queue → DynamoDB + Result Queue)
- Files API (API Gateway → DynamoDB)
"""
from pathlib import Path

from aws_cdk import (
    NestedStack,
    BundlingOptions,
    Duration,
    Stack,
    aws_lambda as lambda_,
    aws_dynamodb as dynamodb,
    aws_s3 as s3,
    aws_sqs as sqs,
    aws_logs as logs,
    aws_lambda_event_sources as event_sources,
)
from constructs import Construct

PROJECT_ROOT = Path(__file__).resolve().parents[2]

# Lambda パッケージに含めないパス
ASSET_EXCLUDE = [
    'cdk.out',
    '.venv',
    '.git',
    '.pytest_cache',
    '*.egg-info',
    '**/__pycache__',
    'infra',
    'tests',
    '*.md',
]


def lambda_code() -> lambda_.Code:
    """src パッケージとランタイム依存をバンドルした Lambda コード"""
    return lambda_.Code.from_asset(
        str(PROJECT_ROOT),
        exclude=ASSET_EXCLUDE,
        bundling=BundlingOptions(
            image=lambda_.Runtime.PYTHON_3_12.bundling_image,
            command=[
                'bash', '-c',
                'pip install -r requirements-lambda.txt -t /asset-output && cp -au src /asset-output/',
            ],
        ),
    )


class ComputeStack(NestedStack):
    """Lambda ベースのサーバレスコンピュートスタック。"""

    def __init__(
        self,
        scope: Construct,
        construct_id: str,
        upload_bucket: s3.IBucket,
        metadata_table: dynamodb.ITable,
        ingest_queue: sqs.IQueue,
        result_queue: sqs.IQueue,
        environment_name: str = 'production',
        **kwargs
    ) -> None:
        super().__init__(scope, construct_id, **kwargs)

        code = lambda_code()
        common_env = {
            'PIPELINE_ENVIRONMENT': environment_name,
            'PIPELINE_AWS_REGION': Stack.of(self).region,
            'PIPELINE_TABLE_NAME': metadata_table.table_name,
        }

        # =================================================================
        # File Processor Lambda
        # =================================================================

        self.processor_fn = lambda_.Function(
            self, 'ProcessorFn',
            runtime=lambda_.Runtime.PYTHON_3_12,
            handler='src.handlers.processor.handler.lambda_handler',
            code=code,
            memory_size=256,
            timeout=Duration.seconds(30),
            environment={
                **common_env,
                'PIPELINE_QUEUE_URL': result_queue.queue_url,
            },
            log_retention=logs.RetentionDays.ONE_WEEK,
        )

        upload_bucket.grant_read(self.processor_fn)
        metadata_table.grant_write_data(self.processor_fn)
        result_queue.grant_send_messages(self.processor_fn)

        # SQS Trigger (S3 ObjectCreated 通知)
        self.processor_fn.add_event_source(
            event_sources.SqsEventSource(
                ingest_queue,
                batch_size=10,
                max_batching_window=Duration.seconds(5),
                report_batch_item_failures=True,
            )
        )

        # =================================================================
        # Files API Lambda
        # =================================================================

        self.files_api_fn = lambda_.Function(
            self, 'FilesApiFn',
            runtime=lambda_.Runtime.PYTHON_3_12,
            handler='src.handlers.files_api.handler.lambda_handler',
            code=code,
            memory_size=128,
            timeout=Duration.seconds(10),
            environment=common_env,
            log_retention=logs.RetentionDays.ONE_WEEK,
        )

        metadata_table.grant_read_data(self.files_api_fn)
