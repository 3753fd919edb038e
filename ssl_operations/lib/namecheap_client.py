"""Namecheap SSL API client: one method per command."""

from collections.abc import Callable

from .config import RenewalConfig
from .exceptions import ResponseParseError, TransportError
from .logging_config import LOGGER
from .models import ActivateResult, ApiResponse, CertificateInfo, CreateResult, RenewResult
from .request_builder import (
    ACTIVATE_COMMAND,
    CREATE_COMMAND,
    GET_INFO_COMMAND,
    RENEW_COMMAND,
    activate_url,
    create_url,
    get_info_url,
    renew_url,
)
from .responses import decode_activate, decode_create, decode_envelope, decode_get_info, decode_renew
from .transport import http_get
from .xml_parser import parse_xml

Transport = Callable[[str, int], str]


class NamecheapSSLClient:
    """Client for the four SSL commands used by a renewal run.

    Every method returns its decoded result on Status=OK and None on any
    failure (transport error, malformed XML, or an API error response).
    Failures are logged, never raised.
    """

    def __init__(self, config: RenewalConfig, transport: Transport = http_get) -> None:
        """Initialize client.

        Args:
            config: Credentials, endpoint and timeout
            transport: Callable issuing the GET request (url, timeout) -> body
        """
        self.config = config
        self.transport = transport

    def _call(self, command: str, url: str) -> ApiResponse | None:
        """Fetch, parse and log one command response; None unless Status=OK."""
        try:
            body = self.transport(url, self.config.timeout)
            response = decode_envelope(parse_xml(body))
        except TransportError as e:
            LOGGER.error("%s request failed: %s", command, e, extra={"command": command})
            return None
        except ResponseParseError as e:
            LOGGER.error("%s response could not be parsed: %s", command, e, extra={"command": command})
            return None

        LOGGER.info("%s response", command, extra={"command": command, "response": response.raw})

        if not response.ok:
            LOGGER.error(
                "%s returned status %s",
                command,
                response.status,
                extra={"command": command, "errors": [err.to_dict() for err in response.errors]},
            )
            return None

        return response

    def create(self) -> CreateResult | None:
        """Purchase a new certificate (namecheap.ssl.create)."""
        response = self._call(CREATE_COMMAND, create_url(self.config))
        if response is None:
            return None
        try:
            result = decode_create(response)
        except ResponseParseError as e:
            LOGGER.error("Certificate creation response incomplete: %s", e)
            return None

        LOGGER.info(
            "Certificate creation successful",
            extra={"command": CREATE_COMMAND, "certificate_id": result.certificate_id},
        )
        return result

    def get_info(self, certificate_id: str) -> CertificateInfo | None:
        """Fetch certificate details (namecheap.ssl.getinfo)."""
        response = self._call(GET_INFO_COMMAND, get_info_url(self.config, certificate_id))
        if response is None:
            return None
        try:
            return decode_get_info(response, certificate_id)
        except ResponseParseError as e:
            LOGGER.error("Certificate info response incomplete: %s", e)
            return None

    def renew(self, certificate_id: str) -> RenewResult | None:
        """Order a renewal of an existing certificate (namecheap.ssl.renew)."""
        response = self._call(RENEW_COMMAND, renew_url(self.config, certificate_id))
        if response is None:
            return None
        try:
            return decode_renew(response)
        except ResponseParseError as e:
            LOGGER.error("Renewal response incomplete: %s", e)
            return None

    def activate(self, certificate_id: str, csr_pem: str) -> ActivateResult | None:
        """Submit the CSR to activate the certificate (namecheap.ssl.activate)."""
        response = self._call(ACTIVATE_COMMAND, activate_url(self.config, certificate_id, csr_pem))
        if response is None:
            return None
        result = decode_activate(response)
        if not result.is_success:
            LOGGER.error(
                "SSL activation reported IsSuccess=false",
                extra={"command": ACTIVATE_COMMAND, "certificate_id": certificate_id},
            )
            return None
        return result
