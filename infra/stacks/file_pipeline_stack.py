"""
File Pipeline Main Stack (Serverless)

S3 → SQS → Lambda → (DynamoDB, SQS) + API Gateway のサーバレス構成。
"""
from aws_cdk import (
    Stack,
    CfnOutput,
)
from constructs import Construct

from infra.stacks.data_stack import DataStack
from infra.stacks.messaging_stack import MessagingStack
from infra.stacks.compute_stack import ComputeStack
from infra.stacks.api_stack import ApiStack
from infra.stacks.monitoring_stack import MonitoringStack


class FilePipelineStack(Stack):
    """File Pipeline のメインスタック (Serverless)。"""

    def __init__(
        self,
        scope: Construct,
        construct_id: str,
        environment_name: str = 'production',
        **kwargs
    ) -> None:
        super().__init__(scope, construct_id, **kwargs)

        # Data Stack (S3, Ingest Queue, DynamoDB)
        self.data_stack = DataStack(self, 'Data')

        # Messaging Stack (Result Queue)
        self.messaging_stack = MessagingStack(self, 'Messaging')

        # Compute Stack (Lambda Functions)
        self.compute_stack = ComputeStack(
            self, 'Compute',
            upload_bucket=self.data_stack.upload_bucket,
            metadata_table=self.data_stack.metadata_table,
            ingest_queue=self.data_stack.ingest_queue,
            result_queue=self.messaging_stack.result_queue,
            environment_name=environment_name,
        )

        # API Stack (API Gateway)
        self.api_stack = ApiStack(
            self, 'Api',
            files_api_fn=self.compute_stack.files_api_fn,
        )

        # Monitoring Stack (CloudWatch Alarms)
        self.monitoring_stack = MonitoringStack(
            self, 'Monitoring',
            processor_fn=self.compute_stack.processor_fn,
            ingest_dlq=self.data_stack.ingest_dlq,
        )

        # Outputs
        CfnOutput(self, 'ApiEndpoint', value=self.api_stack.api_url)
        CfnOutput(self, 'UploadBucketName', value=self.data_stack.upload_bucket.bucket_name)
        CfnOutput(self, 'MetadataTableName', value=self.data_stack.metadata_table.table_name)
        CfnOutput(self, 'ResultQueueUrl', value=self.messaging_stack.result_queue.queue_url)
