"""RSA key and CSR helpers: generation, PEM encoding and read-back checks."""

from cryptography import x509
from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa
from cryptography.hazmat.primitives.asymmetric.rsa import RSAPrivateKey


def generate_private_key(key_size: int = 2048) -> RSAPrivateKey:
    """Generate a fresh RSA key for the activation CSR."""
    return rsa.generate_private_key(
        public_exponent=65537,
        key_size=key_size,
    )


def serialize_private_key(key: RSAPrivateKey) -> bytes:
    """PKCS8 PEM, unencrypted; written to private.key next to the CSR."""
    return key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    )


def deserialize_private_key(pem_data: bytes) -> RSAPrivateKey:
    """Load an unencrypted RSA private key from PEM bytes.

    Raises:
        ValueError: If the PEM is invalid or the key is not RSA
    """
    key = serialization.load_pem_private_key(pem_data, password=None)
    if not isinstance(key, RSAPrivateKey):
        raise ValueError("expected RSA private key")
    return key


def extract_csr_public_key(csr: x509.CertificateSigningRequest) -> rsa.RSAPublicKey:
    """Public key carried by the CSR.

    Raises:
        ValueError: If the key is not RSA (Namecheap activation expects RSA)
    """
    public_key = csr.public_key()
    if not isinstance(public_key, rsa.RSAPublicKey):
        raise ValueError("CSR public key must be RSA type")
    return public_key


def validate_csr_signature(csr: x509.CertificateSigningRequest) -> bool:
    """True when the CSR's self-signature verifies against its own public key."""
    try:
        return csr.is_signature_valid
    except (ValueError, UnsupportedAlgorithm):
        return False


def serialize_csr(csr: x509.CertificateSigningRequest) -> bytes:
    """PEM text submitted as the activate CSR parameter."""
    return csr.public_bytes(serialization.Encoding.PEM)


def deserialize_csr(pem_data: bytes) -> x509.CertificateSigningRequest:
    """Load a CSR from PEM bytes; ValueError if malformed."""
    return x509.load_pem_x509_csr(pem_data)
