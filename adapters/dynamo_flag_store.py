"""
DynamoDB-backed flag store adapter.

Implements FlagStorePort. One item per key; values live in a String Set.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Iterable, Optional, Set

import boto3
from botocore.exceptions import ClientError

from shared_utils.constants import Defaults, LogScope
from shared_utils.error_handler import ExternalServiceError
from shared_utils.logging_utils import get_scoped_logger


logger = get_scoped_logger(LogScope.ADAPTER)


class DynamoFlagStoreAdapter:
    """Amazon DynamoDB implementation of FlagStorePort.

    Table key: ``flag_key`` (partition key, no sort key).
    """

    def __init__(
        self,
        table_name: str,
        region: str = Defaults.AWS_REGION,
        endpoint_url: str = "",
        dynamodb_resource: Optional[object] = None,
    ) -> None:
        self._table_name = table_name
        resource_kwargs: dict = {"region_name": region}
        if endpoint_url:
            resource_kwargs["endpoint_url"] = endpoint_url
        self._dynamo = dynamodb_resource or boto3.resource("dynamodb", **resource_kwargs)
        self._table = self._dynamo.Table(table_name)

    # ------------------------------------------------------------------
    # FlagStorePort implementation
    # ------------------------------------------------------------------

    def get_flag(self, key: str) -> Set[str]:
        try:
            response = self._table.get_item(Key={"flag_key": key})
        except ClientError as exc:
            logger.error("dynamo_get_flag_failed", key=key, error=str(exc))
            raise ExternalServiceError("DynamoDB", f"Failed to read flag: {exc}") from exc
        item = response.get("Item")
        if item is None:
            return set()
        return set(item.get("flag_values", set()))

    def set_flag(self, key: str, values: Iterable[str]) -> None:
        values = set(values)
        if not values:
            # DynamoDB rejects empty sets.
            self.delete_flag(key)
            return
        try:
            self._table.put_item(
                Item={
                    "flag_key": key,
                    "flag_values": values,
                    "updated_at": datetime.now(timezone.utc).isoformat(),
                }
            )
            logger.info("dynamo_set_flag", key=key, size=len(values))
        except ClientError as exc:
            logger.error("dynamo_set_flag_failed", key=key, error=str(exc))
            raise ExternalServiceError("DynamoDB", f"Failed to write flag: {exc}") from exc

    def delete_flag(self, key: str) -> None:
        try:
            self._table.delete_item(Key={"flag_key": key})
            logger.info("dynamo_delete_flag", key=key)
        except ClientError as exc:
            logger.error("dynamo_delete_flag_failed", key=key, error=str(exc))
            raise ExternalServiceError("DynamoDB", f"Failed to delete flag: {exc}") from exc
