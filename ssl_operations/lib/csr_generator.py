"""CSR generation for certificate activation."""

from cryptography import x509
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric.rsa import RSAPrivateKey

from .cert_utils import (
    deserialize_csr,
    deserialize_private_key,
    extract_csr_public_key,
    generate_private_key,
    serialize_csr,
    serialize_private_key,
    validate_csr_signature,
)
from .config import DistinguishedName
from .models import CsrBundle

CSR_PEM_HEADER = "-----BEGIN CERTIFICATE REQUEST-----"


def build_csr(
    subject: DistinguishedName, key_size: int = 2048
) -> tuple[RSAPrivateKey, x509.CertificateSigningRequest]:
    """Generate a fresh key pair and a CSR signed with it.

    Args:
        subject: Distinguished name for the CSR subject
        key_size: RSA key size in bits

    Returns:
        Tuple of (private_key, csr)
    """
    private_key = generate_private_key(key_size)
    csr = (
        x509.CertificateSigningRequestBuilder()
        .subject_name(subject.to_x509_name())
        .sign(private_key, hashes.SHA256())
    )
    return private_key, csr


def verify_csr_bundle(bundle: CsrBundle) -> None:
    """Read both PEMs back and check that they belong together.

    Args:
        bundle: Serialized key and CSR

    Raises:
        ValueError: If either PEM does not load, the CSR signature does not
            verify, or the CSR public key is not the key's public half
    """
    csr = deserialize_csr(bundle.csr_pem.encode("ascii"))
    if not validate_csr_signature(csr):
        raise ValueError("generated CSR failed signature check")

    private_key = deserialize_private_key(bundle.private_key_pem.encode("ascii"))
    if extract_csr_public_key(csr).public_numbers() != private_key.public_key().public_numbers():
        raise ValueError("generated CSR does not match its private key")


def generate_csr(subject: DistinguishedName, key_size: int = 2048) -> CsrBundle:
    """Generate a key pair and CSR, both serialized to PEM text.

    Pure local computation; no network access. The PEM output is read back
    and checked with verify_csr_bundle before it is returned.

    Args:
        subject: Distinguished name for the CSR subject
        key_size: RSA key size in bits

    Returns:
        CsrBundle with csr_pem and private_key_pem

    Raises:
        ValueError: If the serialized CSR fails its self-check
    """
    private_key, csr = build_csr(subject, key_size)
    bundle = CsrBundle(
        csr_pem=serialize_csr(csr).decode("ascii"),
        private_key_pem=serialize_private_key(private_key).decode("ascii"),
    )
    verify_csr_bundle(bundle)
    return bundle
