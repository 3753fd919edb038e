"""Typed results for Namecheap SSL API commands and renewal runs."""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Any

STATUS_OK = "OK"


@dataclass
class ApiError:
    """Single <Error> entry from an API response."""

    number: str
    message: str

    def to_dict(self) -> dict[str, str]:
        return {"number": self.number, "message": self.message}


@dataclass
class ApiResponse:
    """Decoded <ApiResponse> envelope shared by every command."""

    status: str
    command: str
    errors: list[ApiError]
    raw: dict[str, Any]

    @property
    def ok(self) -> bool:
        return self.status.upper() == STATUS_OK


@dataclass
class CreateResult:
    """Result of namecheap.ssl.create."""

    certificate_id: str
    order_id: str | None = None
    transaction_id: str | None = None
    charged_amount: str | None = None
    ssl_type: str | None = None
    years: str | None = None
    status: str | None = None


@dataclass
class CertificateInfo:
    """Result of namecheap.ssl.getinfo.

    expires is None when the API returned no date or one that could not be
    parsed; expires_raw keeps the original text for logging.
    """

    certificate_id: str
    status: str | None
    ssl_type: str | None
    expires: date | None
    expires_raw: str | None = None


@dataclass
class RenewResult:
    """Result of namecheap.ssl.renew."""

    certificate_id: str
    order_id: str | None = None
    transaction_id: str | None = None
    charged_amount: str | None = None
    ssl_type: str | None = None
    years: str | None = None


@dataclass
class ActivateResult:
    """Result of namecheap.ssl.activate."""

    activation_id: str | None
    is_success: bool


@dataclass
class CsrBundle:
    """PEM-encoded CSR and the private key that signed it."""

    csr_pem: str
    private_key_pem: str


class RenewalStage(str, Enum):
    """Furthest stage a renewal run reached."""

    SKIPPED = "skipped"
    FAILED = "failed"
    CREATED = "created"
    ELIGIBILITY_CHECKED = "eligibility-checked"
    RENEWED = "renewed"
    ACTIVATED = "activated"


@dataclass
class RenewalResult:
    """Outcome of one renewal run.

    stage is the last stage completed successfully; failed_step names the
    step that stopped the run, if any.
    """

    stage: RenewalStage
    certificate_id: str | None = None
    renewed_certificate_id: str | None = None
    eligible: bool = False
    days_until_expiration: int | None = None
    csr: CsrBundle | None = None
    failed_step: str | None = None
    api_calls: list[str] = field(default_factory=list)

    @property
    def activated(self) -> bool:
        return self.stage is RenewalStage.ACTIVATED

    @property
    def succeeded(self) -> bool:
        """True when activated, or when the run stopped cleanly as not yet eligible."""
        if self.activated:
            return True
        return self.failed_step is None and self.stage is RenewalStage.ELIGIBILITY_CHECKED

    def to_dict(self) -> dict[str, Any]:
        """Summary for result.json; never includes the private key."""
        return {
            "stage": self.stage.value,
            "certificateId": self.certificate_id,
            "renewedCertificateId": self.renewed_certificate_id,
            "eligible": self.eligible,
            "daysUntilExpiration": self.days_until_expiration,
            "failedStep": self.failed_step,
            "apiCalls": list(self.api_calls),
            "csr": self.csr.csr_pem if self.csr else None,
        }
