"""Renewal configuration dataclasses and environment loading."""

import ipaddress
import os
from collections.abc import Mapping
from dataclasses import dataclass, field

from cryptography import x509
from cryptography.x509 import oid

from .exceptions import ConfigError
from .ssm_client import SSMClient

SANDBOX_ENDPOINT = "https://api.sandbox.namecheap.com/xml.response"
PRODUCTION_ENDPOINT = "https://api.namecheap.com/xml.response"

DEFAULT_RENEWAL_WINDOW_DAYS = 90
DEFAULT_TIMEOUT_SECONDS = 30
MIN_KEY_SIZE = 2048


@dataclass
class DistinguishedName:
    """X.509 Subject Distinguished Name for the CSR."""

    common_name: str = "www.example.com"
    country: str = "US"
    state: str = "California"
    locality: str = "San Francisco"
    organization: str = "Example, Inc."
    organizational_unit: str = "IT"

    def to_x509_name(self) -> x509.Name:
        """Convert to cryptography x509.Name for CSR generation."""
        return x509.Name(
            [
                x509.NameAttribute(oid.NameOID.COMMON_NAME, self.common_name),
                x509.NameAttribute(oid.NameOID.COUNTRY_NAME, self.country),
                x509.NameAttribute(oid.NameOID.STATE_OR_PROVINCE_NAME, self.state),
                x509.NameAttribute(oid.NameOID.LOCALITY_NAME, self.locality),
                x509.NameAttribute(oid.NameOID.ORGANIZATION_NAME, self.organization),
                x509.NameAttribute(oid.NameOID.ORGANIZATIONAL_UNIT_NAME, self.organizational_unit),
            ]
        )


@dataclass
class RenewalConfig:
    """Namecheap API credentials and renewal settings."""

    api_user: str
    api_key: str
    client_ip: str
    ssl_type: str
    username: str = ""
    years: int = 1
    sandbox: bool = True
    certificate_id: str | None = None
    timeout: int = DEFAULT_TIMEOUT_SECONDS
    renewal_window_days: int = DEFAULT_RENEWAL_WINDOW_DAYS
    key_size: int = MIN_KEY_SIZE
    subject: DistinguishedName = field(default_factory=DistinguishedName)

    def __post_init__(self) -> None:
        if not self.username:
            self.username = self.api_user
        self.validate()

    @property
    def endpoint(self) -> str:
        """Namecheap XML API endpoint for the selected environment."""
        return SANDBOX_ENDPOINT if self.sandbox else PRODUCTION_ENDPOINT

    def validate(self) -> None:
        """Check every field, raising ConfigError on the first problem.

        Raises:
            ConfigError: If a required field is empty or a value is out of range
        """
        for name in ("api_user", "api_key", "client_ip", "ssl_type"):
            if not getattr(self, name):
                raise ConfigError(f"{name} is required")

        try:
            ipaddress.ip_address(self.client_ip)
        except ValueError as e:
            raise ConfigError(f"client_ip is not a valid IP address: {self.client_ip!r}") from e

        for name in ("years", "timeout", "renewal_window_days"):
            if getattr(self, name) <= 0:
                raise ConfigError(f"{name} must be positive")

        if self.key_size < MIN_KEY_SIZE:
            raise ConfigError(f"key_size must be at least {MIN_KEY_SIZE}")

        if len(self.subject.country) != 2 or not self.subject.country.isalpha():
            raise ConfigError("subject country must be a two-letter code")

        if not self.subject.common_name:
            raise ConfigError("subject common_name is required")


def _parse_int(environ: Mapping[str, str], name: str, default: int) -> int:
    raw = environ.get(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError as e:
        raise ConfigError(f"{name} must be an integer, got {raw!r}") from e


def _parse_bool(environ: Mapping[str, str], name: str, default: bool) -> bool:
    raw = environ.get(name)
    if raw is None or raw == "":
        return default
    value = raw.strip().lower()
    if value in ("1", "true", "yes", "on"):
        return True
    if value in ("0", "false", "no", "off"):
        return False
    raise ConfigError(f"{name} must be a boolean, got {raw!r}")


def load_subject(environ: Mapping[str, str]) -> DistinguishedName:
    """Build the CSR subject from CSR_* variables, falling back to placeholders."""
    defaults = DistinguishedName()
    return DistinguishedName(
        common_name=environ.get("CSR_COMMON_NAME") or defaults.common_name,
        country=environ.get("CSR_COUNTRY") or defaults.country,
        state=environ.get("CSR_STATE") or defaults.state,
        locality=environ.get("CSR_LOCALITY") or defaults.locality,
        organization=environ.get("CSR_ORGANIZATION") or defaults.organization,
        organizational_unit=environ.get("CSR_ORGANIZATIONAL_UNIT") or defaults.organizational_unit,
    )


def load_config(
    environ: Mapping[str, str] | None = None,
    ssm_client: SSMClient | None = None,
) -> RenewalConfig:
    """Load RenewalConfig from environment variables.

    When NAMECHEAP_API_KEY is unset and NAMECHEAP_API_KEY_SSM_PARAMETER names a
    parameter, the API key is read from SSM Parameter Store.

    Args:
        environ: Variable mapping (default: os.environ)
        ssm_client: SSM client used for the API key lookup (created on demand)

    Returns:
        Validated RenewalConfig

    Raises:
        ConfigError: If a variable is missing or invalid
    """
    if environ is None:
        environ = os.environ

    api_key = environ.get("NAMECHEAP_API_KEY", "")
    parameter_name = environ.get("NAMECHEAP_API_KEY_SSM_PARAMETER", "")
    if not api_key and parameter_name:
        if ssm_client is None:
            ssm_client = SSMClient(region=environ.get("AWS_REGION") or "eu-west-2")
        try:
            api_key = ssm_client.get_secret(parameter_name)
        except ValueError as e:
            raise ConfigError(str(e)) from e

    return RenewalConfig(
        api_user=environ.get("NAMECHEAP_API_USER", ""),
        api_key=api_key,
        client_ip=environ.get("NAMECHEAP_CLIENT_IP", ""),
        ssl_type=environ.get("NAMECHEAP_SSL_TYPE", ""),
        username=environ.get("NAMECHEAP_USERNAME", ""),
        years=_parse_int(environ, "NAMECHEAP_YEARS", 1),
        sandbox=_parse_bool(environ, "NAMECHEAP_SANDBOX", True),
        certificate_id=environ.get("NAMECHEAP_CERTIFICATE_ID") or None,
        timeout=_parse_int(environ, "NAMECHEAP_TIMEOUT", DEFAULT_TIMEOUT_SECONDS),
        renewal_window_days=_parse_int(
            environ, "NAMECHEAP_RENEWAL_WINDOW_DAYS", DEFAULT_RENEWAL_WINDOW_DAYS
        ),
        key_size=_parse_int(environ, "CSR_KEY_SIZE", MIN_KEY_SIZE),
        subject=load_subject(environ),
    )
