from .s3_storage_provider import S3StorageProvider
from .sqs_queue_provider import SQSQueueProvider
from .rekognition_provider import RekognitionProvider

__all__ = [
    'S3StorageProvider',
    'SQSQueueProvider',
    'RekognitionProvider',
]
