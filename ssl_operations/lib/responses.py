"""Decoders from parsed XML mappings to typed per-command results."""

from datetime import date, datetime
from typing import Any

from .exceptions import ResponseParseError
from .models import (
    ActivateResult,
    ApiError,
    ApiResponse,
    CertificateInfo,
    CreateResult,
    RenewResult,
)
from .xml_parser import attribute, element_text, find_path, first_child

# Namecheap returns MM/DD/YYYY; ISO forms are accepted for robustness
EXPIRES_FORMATS = ("%m/%d/%Y", "%Y-%m-%d", "%m/%d/%Y %H:%M:%S", "%Y-%m-%dT%H:%M:%S")


def decode_envelope(parsed: dict[str, Any]) -> ApiResponse:
    """Decode the <ApiResponse> envelope.

    Args:
        parsed: Output of parse_xml

    Returns:
        ApiResponse with status, command and structured errors

    Raises:
        ResponseParseError: If the root is not ApiResponse or has no Status
    """
    root = parsed.get("ApiResponse")
    if root is None:
        raise ResponseParseError(f"expected ApiResponse root, got {list(parsed)}")

    status = attribute(root, "Status")
    if not status:
        raise ResponseParseError("ApiResponse has no Status attribute")

    errors = [
        ApiError(number=attribute(node, "Number", "") or "", message=element_text(node) or "")
        for node in (first_child(root, "Errors") or {}).get("Error", [])
    ]

    return ApiResponse(
        status=status,
        command=element_text(first_child(root, "RequestedCommand")) or "",
        errors=errors,
        raw=parsed,
    )


def _command_result(response: ApiResponse, result_tag: str) -> dict[str, Any]:
    node = find_path(response.raw["ApiResponse"], "CommandResponse", result_tag)
    if node is None:
        raise ResponseParseError(f"{result_tag} missing from CommandResponse")
    return node


def _optional_command_result(response: ApiResponse, result_tag: str) -> dict[str, Any]:
    return find_path(response.raw["ApiResponse"], "CommandResponse", result_tag) or {}


def _certificate_id(node: dict[str, Any]) -> str:
    """CertificateID attribute; empty when absent, decimal digits otherwise."""
    value = (attribute(node, "CertificateID", "") or "").strip()
    if value and not (value.isascii() and value.isdigit()):
        raise ResponseParseError(f"CertificateID is not numeric: {value!r}")
    return value


def parse_expires(value: str | None) -> date | None:
    """Parse an expiration date string; None when absent or unparseable."""
    if not value:
        return None
    value = value.strip()
    for fmt in EXPIRES_FORMATS:
        try:
            return datetime.strptime(value, fmt).date()
        except ValueError:
            continue
    try:
        return datetime.fromisoformat(value).date()
    except ValueError:
        return None


def decode_create(response: ApiResponse) -> CreateResult:
    """Decode SSLCreateResult/SSLCertificate."""
    result = _command_result(response, "SSLCreateResult")
    certificate = first_child(result, "SSLCertificate")
    if certificate is None:
        raise ResponseParseError("SSLCertificate missing from SSLCreateResult")

    return CreateResult(
        certificate_id=_certificate_id(certificate),
        order_id=attribute(result, "OrderId"),
        transaction_id=attribute(result, "TransactionId"),
        charged_amount=attribute(result, "ChargedAmount"),
        ssl_type=attribute(certificate, "SSLType"),
        years=attribute(certificate, "Years"),
        status=attribute(certificate, "Status"),
    )


def decode_get_info(response: ApiResponse, certificate_id: str) -> CertificateInfo:
    """Decode SSLGetInfoResult.

    The expiration date is read from CertificateDetails/Expires, falling back
    to the Expires attribute on SSLGetInfoResult.
    """
    result = _command_result(response, "SSLGetInfoResult")
    expires_raw = element_text(find_path(result, "CertificateDetails", "Expires"))
    if not expires_raw:
        expires_raw = attribute(result, "Expires")

    return CertificateInfo(
        certificate_id=certificate_id,
        status=attribute(result, "Status"),
        ssl_type=attribute(result, "Type"),
        expires=parse_expires(expires_raw),
        expires_raw=expires_raw,
    )


def decode_renew(response: ApiResponse) -> RenewResult:
    """Decode SSLRenewResult.

    Status=OK is the success signal for renew; an absent SSLRenewResult
    decodes to an empty RenewResult.
    """
    result = _optional_command_result(response, "SSLRenewResult")
    return RenewResult(
        certificate_id=_certificate_id(result),
        order_id=attribute(result, "OrderId"),
        transaction_id=attribute(result, "TransactionId"),
        charged_amount=attribute(result, "ChargedAmount"),
        ssl_type=attribute(result, "SSLType"),
        years=attribute(result, "Years"),
    )


def decode_activate(response: ApiResponse) -> ActivateResult:
    """Decode SSLActivateResult.

    A missing SSLActivateResult or IsSuccess attribute counts as success
    since the envelope already reported Status=OK.
    """
    result = _optional_command_result(response, "SSLActivateResult")
    is_success = (attribute(result, "IsSuccess", "true") or "").lower() == "true"
    return ActivateResult(activation_id=attribute(result, "ID"), is_success=is_success)
