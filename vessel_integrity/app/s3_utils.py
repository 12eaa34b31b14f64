"""
This module provides utility functions for interacting with AWS S3.
"""
import io
import logging

import boto3
import pandas as pd
from botocore.exceptions import ClientError

from vessel_integrity.config import AWS_REGION

logger = logging.getLogger(__name__)


def get_s3_client(region_name=None):
    """
    Initializes and returns a boto3 client for S3. Credentials come from the
    default provider chain; prefer role-based credentials in production.
    """
    return boto3.client('s3', region_name=region_name or AWS_REGION)


def load_csv_from_s3(bucket_name, key, s3_client=None):
    """
    Loads a CSV object from S3 into a pandas DataFrame.
    Returns None if the object does not exist or cannot be read.
    """
    s3_client = s3_client or get_s3_client()

    try:
        response = s3_client.get_object(Bucket=bucket_name, Key=key)
        csv_data = response['Body'].read()
        return pd.read_csv(io.BytesIO(csv_data))
    except ClientError as e:
        if e.response['Error']['Code'] in ('NoSuchKey', '404'):
            logger.info(f"No object at s3://{bucket_name}/{key}")
        else:
            logger.error(f"Error loading s3://{bucket_name}/{key}: {e.response['Error']['Message']}")
        return None


def save_csv_to_s3(df, bucket_name, key, s3_client=None):
    """
    Writes a DataFrame to S3 as a single CSV object. A PUT replaces the
    whole object, so readers never see a partially written table.
    """
    s3_client = s3_client or get_s3_client()
    body = df.to_csv(index=False).encode('utf-8')

    try:
        s3_client.put_object(Bucket=bucket_name, Key=key, Body=body, ContentType='text/csv')
    except ClientError as e:
        logger.error(f"Error writing s3://{bucket_name}/{key}: {e.response['Error']['Message']}")
        raise
