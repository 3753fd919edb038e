"""Query-string URL construction for Namecheap SSL API commands."""

import urllib.parse

from .config import RenewalConfig

CREATE_COMMAND = "namecheap.ssl.create"
GET_INFO_COMMAND = "namecheap.ssl.getinfo"
RENEW_COMMAND = "namecheap.ssl.renew"
ACTIVATE_COMMAND = "namecheap.ssl.activate"


def build_command_url(config: RenewalConfig, command: str, params: dict[str, str] | None = None) -> str:
    """Build the GET URL for one API command.

    Global parameters (ApiUser, ApiKey, UserName, ClientIp, Command) come first,
    followed by the command-specific ones. Every value is URL-encoded.

    Args:
        config: Credentials and endpoint selection
        command: Namecheap command name (e.g., 'namecheap.ssl.renew')
        params: Command-specific query parameters

    Returns:
        Fully-formed request URL
    """
    query = {
        "ApiUser": config.api_user,
        "ApiKey": config.api_key,
        "UserName": config.username,
        "ClientIp": config.client_ip,
        "Command": command,
    }
    if params:
        query.update(params)
    return f"{config.endpoint}?{urllib.parse.urlencode(query)}"


def create_url(config: RenewalConfig) -> str:
    return build_command_url(
        config,
        CREATE_COMMAND,
        {"Type": config.ssl_type, "Years": str(config.years)},
    )


def get_info_url(config: RenewalConfig, certificate_id: str) -> str:
    return build_command_url(
        config,
        GET_INFO_COMMAND,
        {
            "CertificateID": certificate_id,
            "returncertificate": "true",
            "returntype": "individual",
        },
    )


def renew_url(config: RenewalConfig, certificate_id: str) -> str:
    return build_command_url(
        config,
        RENEW_COMMAND,
        {
            "CertificateID": certificate_id,
            "SSLType": config.ssl_type,
            "Years": str(config.years),
        },
    )


def activate_url(config: RenewalConfig, certificate_id: str, csr_pem: str) -> str:
    """Build the activate URL; the PEM CSR is percent-encoded in the query."""
    return build_command_url(
        config,
        ACTIVATE_COMMAND,
        {
            "CertificateID": certificate_id,
            "CSR": csr_pem,
            "Type": config.ssl_type,
        },
    )
