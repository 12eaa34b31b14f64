"""
Alert sinks for the batched criticality notification of an aggregation run.
"""
import logging
from abc import ABC, abstractmethod

import boto3
from botocore.exceptions import ClientError

from vessel_integrity.config import ALERT_TOPIC_ARN, AWS_REGION
from vessel_integrity.core.models import CriticalityAlert

logger = logging.getLogger(__name__)


class AlertSink(ABC):
    """Interface: deliver one CriticalityAlert."""

    @abstractmethod
    def send(self, alert: CriticalityAlert) -> None:
        ...


class LoggingAlertSink(AlertSink):
    """Writes alerts to the log; also keeps them for inspection by the host."""

    def __init__(self):
        self.sent = []

    def send(self, alert):
        logger.critical(f"{alert.title} - {alert.content}")
        self.sent.append(alert)


class SNSAlertSink(AlertSink):
    """Publishes alerts to an SNS topic (email/SMS subscribers of the owner)."""

    def __init__(self, topic_arn=None, sns_client=None, region_name=None):
        self.topic_arn = topic_arn or ALERT_TOPIC_ARN
        if not self.topic_arn:
            raise ValueError("No alert topic configured. Set VESSEL_INTEGRITY_ALERT_TOPIC_ARN.")
        self.sns_client = sns_client or boto3.client('sns', region_name=region_name or AWS_REGION)

    def send(self, alert):
        try:
            self.sns_client.publish(
                TopicArn=self.topic_arn,
                Subject=alert.title[:100],
                Message=alert.content,
            )
        except ClientError as e:
            logger.error(f"Failed to publish alert for vessel {alert.vessel_tag}: "
                         f"{e.response['Error']['Message']}")
            raise
        logger.info(f"Published criticality alert for vessel {alert.vessel_tag} to {self.topic_arn}")
