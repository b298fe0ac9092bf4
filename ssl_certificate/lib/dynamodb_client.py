"""DynamoDB client for reading data bag items."""

import logging

import boto3
from boto3.dynamodb.types import Binary
from botocore.exceptions import ClientError
from mypy_boto3_dynamodb.service_resource import DynamoDBServiceResource
from mypy_boto3_dynamodb.type_defs import TableAttributeValueTypeDef

from .config import DEFAULT_REGION

logger = logging.getLogger(__name__)

# Data bag items are keyed by "id", one table per bag.
ITEM_ID_ATTRIBUTE = "id"


class DynamoDBClient:
    """DynamoDB client acting as the data bag item store."""

    def __init__(self, region: str = DEFAULT_REGION) -> None:
        """Initialize DynamoDB resource.

        Args:
            region: AWS region for DynamoDB resource
        """
        self.resource: DynamoDBServiceResource = boto3.resource("dynamodb", region_name=region)

    def get_item(self, bag: str, item: str) -> dict[str, TableAttributeValueTypeDef] | None:
        """Fetch a data bag item.

        Args:
            bag: DynamoDB table name
            item: Item id

        Returns:
            The item attributes, or None if the table or item does not exist

        Raises:
            ClientError: For errors other than ResourceNotFoundException
        """
        table = self.resource.Table(bag)

        try:
            response = table.get_item(Key={ITEM_ID_ATTRIBUTE: item})
        except ClientError as e:
            error_code = e.response.get("Error", {}).get("Code")
            if error_code == "ResourceNotFoundException":
                logger.debug("data bag table %s not found", bag)
                return None
            raise

        return response.get("Item")

    def get_item_value(self, bag: str, item: str, item_key: str) -> str | bytes | None:
        """Fetch one key of a data bag item.

        Returns:
            The stored string or binary value, or None if bag, item or key is missing
        """
        data = self.get_item(bag, item)
        if data is None:
            return None

        value = data.get(item_key)
        if isinstance(value, Binary):
            return bytes(value.value)
        if isinstance(value, (str, bytes)):
            return value
        return None
