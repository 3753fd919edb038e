"""Test fixtures for ssl_operations tests."""

import logging
from collections.abc import Callable, Generator
from datetime import date, timedelta
from unittest.mock import MagicMock

import pytest

from ssl_operations.lib.config import DistinguishedName, RenewalConfig
from ssl_operations.lib.namecheap_client import NamecheapSSLClient

NAMESPACE = "http://api.namecheap.com/xml.response"
TODAY = date(2026, 10, 19)


def _envelope(command: str, status: str, errors: str, command_response: str) -> str:
    return f"""<?xml version="1.0" encoding="utf-8"?>
<ApiResponse Status="{status}" xmlns="{NAMESPACE}">
  <Errors>{errors}</Errors>
  <Warnings />
  <RequestedCommand>{command}</RequestedCommand>
  {command_response}
  <Server>PHX01SBAPIEXT01</Server>
  <GMTTimeDifference>--4:00</GMTTimeDifference>
  <ExecutionTime>0.123</ExecutionTime>
</ApiResponse>"""


@pytest.fixture
def today() -> date:
    """Fixed reference date for eligibility checks."""
    return TODAY


@pytest.fixture
def csr_subject() -> DistinguishedName:
    """Return test CSR subject."""
    return DistinguishedName(
        common_name="www.test.example",
        country="GB",
        state="London",
        locality="London",
        organization="Test Org",
        organizational_unit="Test Unit",
    )


@pytest.fixture
def renewal_config(csr_subject: DistinguishedName) -> RenewalConfig:
    """Return sandbox renewal configuration with test credentials."""
    return RenewalConfig(
        api_user="testuser",
        api_key="test-api-key",
        client_ip="203.0.113.10",
        ssl_type="PositiveSSL",
        years=1,
        sandbox=True,
        timeout=5,
        key_size=2048,
        subject=csr_subject,
    )


@pytest.fixture
def create_ok_xml() -> Callable[[str], str]:
    """Factory for a successful namecheap.ssl.create response."""

    def _build(certificate_id: str = "12345") -> str:
        return _envelope(
            "namecheap.ssl.create",
            "OK",
            "",
            f"""<CommandResponse Type="namecheap.ssl.create">
    <SSLCreateResult IsSuccess="true" OrderId="998877" TransactionId="554433" ChargedAmount="9.0000">
      <SSLCertificate CertificateID="{certificate_id}" Created="10/19/2026" SSLType="PositiveSSL" Years="1" Status="NewPurchase" />
    </SSLCreateResult>
  </CommandResponse>""",
        )

    return _build


@pytest.fixture
def get_info_xml() -> Callable[[str], str]:
    """Factory for a successful namecheap.ssl.getinfo response with a given Expires."""

    def _build(expires: str) -> str:
        return _envelope(
            "namecheap.ssl.getinfo",
            "OK",
            "",
            f"""<CommandResponse Type="namecheap.ssl.getinfo">
    <SSLGetInfoResult Status="active" StatusDescription="Certificate is active" Type="PositiveSSL" IssuedOn="10/19/2025" Expires="{expires}" ActivationExpireDate="" OrderId="998877" ReplacedBy="0" SANSCount="0">
      <CertificateDetails>
        <CSR />
        <ApproverEmail>admin@test.example</ApproverEmail>
        <CommonName>www.test.example</CommonName>
        <AdministratorName>Test Admin</AdministratorName>
        <Expires>{expires}</Expires>
      </CertificateDetails>
      <Provider>
        <OrderID>113344</OrderID>
        <Name>COMODO</Name>
      </Provider>
    </SSLGetInfoResult>
  </CommandResponse>""",
        )

    return _build


@pytest.fixture
def expires_in() -> Callable[[int], str]:
    """Format TODAY + days the way Namecheap reports expiration dates."""

    def _format(days: int) -> str:
        return (TODAY + timedelta(days=days)).strftime("%m/%d/%Y")

    return _format


@pytest.fixture
def renew_ok_xml() -> Callable[[str], str]:
    """Factory for a successful namecheap.ssl.renew response."""

    def _build(certificate_id: str = "12345") -> str:
        id_attr = f' CertificateID="{certificate_id}"' if certificate_id else ""
        return _envelope(
            "namecheap.ssl.renew",
            "OK",
            "",
            f"""<CommandResponse Type="namecheap.ssl.renew">
    <SSLRenewResult{id_attr} Years="1" SSLType="PositiveSSL" OrderId="998878" TransactionId="554434" ChargedAmount="9.0000" />
  </CommandResponse>""",
        )

    return _build


@pytest.fixture
def activate_ok_xml() -> str:
    """Successful namecheap.ssl.activate response."""
    return _envelope(
        "namecheap.ssl.activate",
        "OK",
        "",
        """<CommandResponse Type="namecheap.ssl.activate">
    <SSLActivateResult ID="12345" IsSuccess="true">
      <DNSDCValidation ValueAvailable="false" />
    </SSLActivateResult>
  </CommandResponse>""",
    )


@pytest.fixture
def error_xml() -> Callable[..., str]:
    """Factory for an ERROR response carrying one structured error."""

    def _build(
        command: str,
        number: str = "2011170",
        message: str = "Validation error: API key is invalid",
    ) -> str:
        return _envelope(
            command,
            "ERROR",
            f'<Error Number="{number}">{message}</Error>',
            "<CommandResponse />",
        )

    return _build


@pytest.fixture
def mock_transport() -> MagicMock:
    """Transport stub; set side_effect to the response bodies in call order."""
    return MagicMock()


@pytest.fixture
def client(renewal_config: RenewalConfig, mock_transport: MagicMock) -> NamecheapSSLClient:
    """NamecheapSSLClient wired to the mocked transport."""
    return NamecheapSSLClient(renewal_config, transport=mock_transport)


@pytest.fixture
def propagating_logger() -> Generator[logging.Logger]:
    """Let caplog see records from the non-propagating ssl_operations logger."""
    logger = logging.getLogger("ssl_operations")
    logger.propagate = True
    try:
        yield logger
    finally:
        logger.propagate = False
