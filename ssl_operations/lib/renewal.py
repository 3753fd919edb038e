"""Renewal orchestration: create, check eligibility, renew, generate CSR, activate."""

from collections.abc import Callable
from datetime import date

from .config import DistinguishedName, RenewalConfig
from .csr_generator import generate_csr
from .eligibility import days_until_expiration, is_eligible_for_renewal, today_utc
from .logging_config import LOGGER
from .models import CsrBundle, RenewalResult, RenewalStage
from .namecheap_client import NamecheapSSLClient

CsrFactory = Callable[[DistinguishedName, int], CsrBundle]


def has_identifier(certificate_id: str | int | None) -> bool:
    """True only for a non-zero decimal certificate id.

    None, empty, 0, all-zero placeholders like '0000000' and anything that is
    not plain ASCII digits are treated as absent.
    """
    if certificate_id is None:
        return False
    value = str(certificate_id).strip()
    return value.isascii() and value.isdigit() and value.strip("0") != ""


def run_renewal(
    client: NamecheapSSLClient,
    config: RenewalConfig,
    certificate_id: str | None = None,
    today: date | None = None,
    csr_factory: CsrFactory = generate_csr,
) -> RenewalResult:
    """Run one renewal from start to finish.

    1. Create a certificate, unless an existing certificate_id is given
       (argument first, then config.certificate_id)
    2. Fetch certificate info and check the renewal window
    3. Renew the certificate
    4. Generate a fresh key pair and CSR
    5. Activate the renewed certificate with the CSR

    Each step must succeed before the next one runs. API and transport
    failures are logged by the client and end the run; nothing is raised.

    Args:
        client: Namecheap SSL API client
        config: Renewal configuration (window, key size, CSR subject)
        certificate_id: Existing certificate to renew (skips creation)
        today: Reference date for the eligibility check (default: today, UTC)
        csr_factory: CSR generator (subject, key_size) -> CsrBundle

    Returns:
        RenewalResult describing the last stage reached
    """
    result = RenewalResult(stage=RenewalStage.FAILED)

    if certificate_id is None:
        certificate_id = config.certificate_id

    if certificate_id is None:
        result.api_calls.append("create")
        created = client.create()
        if created is None:
            result.failed_step = "create"
            return result
        certificate_id = created.certificate_id
    else:
        LOGGER.info(
            "Using existing certificate, skipping creation",
            extra={"certificate_id": certificate_id},
        )

    if not has_identifier(certificate_id):
        LOGGER.warning("No certificate identifier available, skipping renewal")
        result.stage = RenewalStage.SKIPPED
        return result

    result.certificate_id = str(certificate_id)
    result.stage = RenewalStage.CREATED

    # Eligibility
    result.api_calls.append("get_info")
    info = client.get_info(result.certificate_id)
    if info is None:
        result.failed_step = "get_info"
        return result

    if info.expires is None:
        LOGGER.error(
            "Could not parse expiration date %r",
            info.expires_raw,
            extra={"certificate_id": result.certificate_id},
        )
        result.failed_step = "get_info"
        return result

    reference = today or today_utc()
    days_left = days_until_expiration(info.expires, reference)
    result.days_until_expiration = days_left
    result.stage = RenewalStage.ELIGIBILITY_CHECKED
    result.eligible = is_eligible_for_renewal(info.expires, reference, config.renewal_window_days)

    if not result.eligible:
        LOGGER.info(
            "Certificate not eligible for renewal. Days until eligible: %d",
            days_left - config.renewal_window_days,
            extra={"certificate_id": result.certificate_id, "days_until_expiration": days_left},
        )
        return result

    LOGGER.info(
        "Certificate eligible for renewal",
        extra={"certificate_id": result.certificate_id, "days_until_expiration": days_left},
    )

    # Renew
    result.api_calls.append("renew")
    renewed = client.renew(result.certificate_id)
    if renewed is None:
        result.failed_step = "renew"
        return result

    result.stage = RenewalStage.RENEWED
    # Reported for the record only; activation uses the id threaded through the run
    if has_identifier(renewed.certificate_id):
        result.renewed_certificate_id = renewed.certificate_id

    # CSR
    try:
        result.csr = csr_factory(config.subject, config.key_size)
    except ValueError as e:
        LOGGER.error("CSR generation failed: %s", e, extra={"certificate_id": result.certificate_id})
        result.failed_step = "csr"
        return result
    LOGGER.info(
        "Generated CSR",
        extra={"certificate_id": result.certificate_id, "csr": result.csr.csr_pem},
    )

    # Activate
    result.api_calls.append("activate")
    activated = client.activate(result.certificate_id, result.csr.csr_pem)
    if activated is None:
        result.failed_step = "activate"
        return result

    result.stage = RenewalStage.ACTIVATED
    LOGGER.info("SSL activation successful", extra={"certificate_id": result.certificate_id})
    return result
