"""CloudWatch backend adapter built on boto3."""

import asyncio
import logging
from collections.abc import Sequence
from typing import Any

import boto3

logger = logging.getLogger(__name__)

CLOUDWATCH_API_VERSION = "2010-08-01"


class CloudWatchBackend:
    """boto3 implementation of MetricBackendPort.

    boto3 clients are blocking, so each PutMetricData call runs in a worker
    thread. botocore errors propagate unchanged to the caller.

    Args:
        client: Preconfigured CloudWatch client. Created from the region
            when omitted.
        region_name: AWS region. None uses the boto3 default chain.
        api_version: CloudWatch API version.
    """

    def __init__(
        self,
        client: Any | None = None,
        *,
        region_name: str | None = None,
        api_version: str = CLOUDWATCH_API_VERSION,
    ) -> None:
        if client is None:
            client = boto3.client(
                "cloudwatch", region_name=region_name, api_version=api_version
            )
        self._client = client

    @property
    def client(self) -> Any:
        return self._client

    async def put_metric_data(
        self, namespace: str, metric_data: Sequence[dict[str, Any]]
    ) -> Any:
        """Send one batch of data points to CloudWatch."""
        logger.debug(
            "PutMetricData with %d data points",
            len(metric_data),
            extra={"namespace": namespace},
        )
        return await asyncio.to_thread(
            self._client.put_metric_data,
            Namespace=namespace,
            MetricData=list(metric_data),
        )
