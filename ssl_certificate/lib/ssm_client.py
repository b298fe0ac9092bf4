"""SSM client for reading chain secrets from AWS Parameter Store."""

import boto3
from botocore.exceptions import ClientError

from .config import DEFAULT_REGION


def vault_parameter_name(bag: str, item: str, item_key: str) -> str:
    """Return the Parameter Store name holding bag/item/item_key."""
    return f"/{bag}/{item}/{item_key}"


class SSMClient:
    """SSM client acting as the secret broker (decryption handled by KMS)."""

    def __init__(self, region: str = DEFAULT_REGION) -> None:
        """Initialize SSM client.

        Args:
            region: AWS region for SSM client
        """
        self.client = boto3.client("ssm", region_name=region)

    def get_secret(self, bag: str, item: str, item_key: str) -> bytes | None:
        """Fetch a decrypted secret value from SSM.

        Args:
            bag: Top-level path segment (vault name)
            item: Item path segment
            item_key: Key path segment

        Returns:
            Parameter value as bytes, or None if the parameter does not exist

        Raises:
            ClientError: For errors other than ParameterNotFound
        """
        name = vault_parameter_name(bag, item, item_key)

        try:
            response = self.client.get_parameter(Name=name, WithDecryption=True)
        except ClientError as e:
            error_code = e.response.get("Error", {}).get("Code", "")
            if error_code == "ParameterNotFound":
                return None
            raise

        return response["Parameter"]["Value"].encode("utf-8")
