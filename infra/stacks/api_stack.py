"""
API Stack

API Gateway (REST) for the metadata read endpoint.
"""
from aws_cdk import (
    NestedStack,
    Duration,
    aws_apigateway as apigw,
    aws_lambda as lambda_,
)
from constructs import Construct


class ApiStack(NestedStack):
    """API Gateway スタック。"""

    def __init__(
        self,
        scope: Construct,
        construct_id: str,
        files_api_fn: lambda_.IFunction,
        **kwargs
    ) -> None:
        super().__init__(scope, construct_id, **kwargs)

        # =================================================================
        # REST API
        # =================================================================

        self.api = apigw.RestApi(
            self, 'FileApi',
            rest_api_name='file-pipeline-api',
            description='File Pipeline metadata API',
            cloud_watch_role=True,
            deploy_options=apigw.StageOptions(
                stage_name='v1',
                logging_level=apigw.MethodLoggingLevel.INFO,
                metrics_enabled=True,
                throttling_rate_limit=100,
                throttling_burst_limit=50,
            ),
            default_cors_preflight_options=apigw.CorsOptions(
                allow_origins=apigw.Cors.ALL_ORIGINS,
                allow_methods=['GET', 'OPTIONS'],
                allow_headers=['Content-Type', 'Authorization'],
            ),
        )

        files_integration = apigw.LambdaIntegration(
            files_api_fn,
            timeout=Duration.seconds(29),
        )

        # =================================================================
        # File Endpoints
        # =================================================================

        files_resource = self.api.root.add_resource('files')

        # GET /files/{fileId} - Get file metadata
        file_resource = files_resource.add_resource('{fileId}')
        file_resource.add_method('GET', files_integration)

        # GET /files/{fileId}/status - Get processing status
        status_resource = file_resource.add_resource('status')
        status_resource.add_method('GET', files_integration)

        # =================================================================
        # Health Check
        # =================================================================

        health_resource = self.api.root.add_resource('health')
        health_resource.add_method(
            'GET',
            apigw.MockIntegration(
                integration_responses=[
                    apigw.IntegrationResponse(
                        status_code='200',
                        response_templates={
                            'application/json': '{"status": "healthy", "service": "file-pipeline"}'
                        },
                    )
                ],
                request_templates={
                    'application/json': '{"statusCode": 200}'
                },
            ),
            method_responses=[
                apigw.MethodResponse(status_code='200')
            ],
        )

        # =================================================================
        # Outputs
        # =================================================================

        self.api_url = self.api.url
