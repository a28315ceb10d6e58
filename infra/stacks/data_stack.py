"""
Data Stack (Serverless)

S3, SQS, DynamoDB (On-Demand)
- Upload Bucket (アップロード先)
- Ingest Queue (ObjectCreated 通知の受け口)
- Metadata Table (処理結果メタデータ)

S3 通知の宛先キューはバケットと同じスタックに置く
(別スタックにするとバケットポリシーと通知設定が循環参照になる)。
"""
from aws_cdk import (
    NestedStack,
    RemovalPolicy,
    Duration,
    aws_dynamodb as dynamodb,
    aws_s3 as s3,
    aws_s3_notifications as s3n,
    aws_sqs as sqs,
)
from constructs import Construct


class DataStack(NestedStack):
    """サーバレスデータ層のリソースを管理するスタック。"""

    def __init__(
        self,
        scope: Construct,
        construct_id: str,
        **kwargs
    ) -> None:
        super().__init__(scope, construct_id, **kwargs)

        # =================================================================
        # DynamoDB Table
        # =================================================================

        # Metadata Table (fileId → status, timestamp, size)
        self.metadata_table = dynamodb.Table(
            self, 'MetadataTable',
            partition_key=dynamodb.Attribute(
                name='fileId',
                type=dynamodb.AttributeType.STRING
            ),
            billing_mode=dynamodb.BillingMode.PAY_PER_REQUEST,
            encryption=dynamodb.TableEncryption.AWS_MANAGED,
            removal_policy=RemovalPolicy.DESTROY,
        )

        # =================================================================
        # SQS Queues
        # =================================================================

        self.ingest_dlq = sqs.Queue(
            self, 'IngestDeadLetterQueue',
            retention_period=Duration.days(14),
            enforce_ssl=True,
        )

        # Lambda のタイムアウトより長い visibility timeout が必要
        self.ingest_queue = sqs.Queue(
            self, 'IngestQueue',
            visibility_timeout=Duration.seconds(180),
            enforce_ssl=True,
            dead_letter_queue=sqs.DeadLetterQueue(
                max_receive_count=3,
                queue=self.ingest_dlq,
            ),
        )

        # =================================================================
        # S3 Bucket
        # =================================================================

        self.upload_bucket = s3.Bucket(
            self, 'UploadBucket',
            encryption=s3.BucketEncryption.S3_MANAGED,
            block_public_access=s3.BlockPublicAccess.BLOCK_ALL,
            enforce_ssl=True,
            versioned=True,
            lifecycle_rules=[
                s3.LifecycleRule(
                    id='ExpireNoncurrentVersions',
                    noncurrent_version_expiration=Duration.days(30),
                ),
            ],
            removal_policy=RemovalPolicy.RETAIN,
        )

        # ObjectCreated → Ingest Queue
        self.upload_bucket.add_event_notification(
            s3.EventType.OBJECT_CREATED,
            s3n.SqsDestination(self.ingest_queue),
        )
