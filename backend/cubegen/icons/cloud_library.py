"""
Cloud provider icon catalog.

Imported lazily by the icon registry; keep module-level work limited to
building this table.
"""

CLOUD_LIBRARY_ICONS = {
    # AWS
    "AwsEc2": "Amazon EC2",
    "AwsLambda": "AWS Lambda",
    "AwsS3": "Amazon S3",
    "AwsRds": "Amazon RDS",
    "AwsDynamoDb": "Amazon DynamoDB",
    "AwsSqs": "Amazon SQS",
    "AwsSns": "Amazon SNS",
    "AwsApiGateway": "Amazon API Gateway",
    "AwsCloudFront": "Amazon CloudFront",
    "AwsElb": "Elastic Load Balancing",
    "AwsEks": "Amazon EKS",
    "AwsElastiCache": "Amazon ElastiCache",
    # Azure
    "AzureVm": "Azure Virtual Machines",
    "AzureFunctions": "Azure Functions",
    "AzureBlob": "Azure Blob Storage",
    "AzureSql": "Azure SQL Database",
    "AzureCosmosDb": "Azure Cosmos DB",
    "AzureServiceBus": "Azure Service Bus",
    "AzureAks": "Azure Kubernetes Service",
    # GCP
    "GcpComputeEngine": "Compute Engine",
    "GcpCloudFunctions": "Cloud Functions",
    "GcpCloudStorage": "Cloud Storage",
    "GcpCloudSql": "Cloud SQL",
    "GcpPubSub": "Pub/Sub",
    "GcpGke": "Google Kubernetes Engine",
    "GcpBigQuery": "BigQuery",
}
