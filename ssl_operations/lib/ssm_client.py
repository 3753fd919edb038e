"""SSM client for reading Namecheap API secrets from AWS Parameter Store."""

import boto3
from botocore.exceptions import ClientError


class SSMClient:
    """SSM client for reading API credentials (written out of band)."""

    def __init__(self, region: str = "eu-west-2") -> None:
        """Initialize SSM client.

        Args:
            region: AWS region for SSM client
        """
        self.client = boto3.client("ssm", region_name=region)

    def get_secret(self, parameter_name: str) -> str:
        """Fetch and decrypt a SecureString parameter.

        Args:
            parameter_name: Full parameter path (e.g., '/namecheap/api-key')

        Returns:
            Decrypted parameter value

        Raises:
            ValueError: If the parameter does not exist
        """
        try:
            response = self.client.get_parameter(Name=parameter_name, WithDecryption=True)
        except ClientError as e:
            error_code = e.response.get("Error", {}).get("Code", "")
            if error_code == "ParameterNotFound":
                raise ValueError(
                    f"API key not found in SSM. Path checked: {parameter_name}"
                ) from e
            raise

        return response["Parameter"]["Value"]
