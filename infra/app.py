#!/usr/bin/env python3
"""
CDK Application Entry Point

File Pipeline - S3 アップロードを契機にメタデータを記録するサーバレス構成をデプロイ。
"""
import os
import aws_cdk as cdk

from infra.stacks.file_pipeline_stack import FilePipelineStack

app = cdk.App()

# 環境設定
env = cdk.Environment(
    account=os.environ.get('CDK_DEFAULT_ACCOUNT'),
    region=os.environ.get('CDK_DEFAULT_REGION', 'us-east-1'),
)

FilePipelineStack(
    app,
    'FilePipelineStack',
    environment_name=app.node.try_get_context('environment') or 'production',
    env=env,
    description='File Pipeline - S3 upload processing with DynamoDB metadata and SQS notifications',
)

app.synth()
