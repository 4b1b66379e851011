"""Cryptographic operations exchanged as PEM bytes.

The CA manager and the host issuer never touch key objects directly. They
pass PEM bytes through a provider, so tests can substitute a fake that
records calls without generating keys.
"""

from cryptography.exceptions import UnsupportedAlgorithm

from .cert_utils import (
    deserialize_certificate,
    deserialize_csr,
    deserialize_private_key,
    generate_private_key,
    serialize_certificate,
    serialize_csr,
    serialize_private_key,
)
from .certificate_builder import CertificateBuilder
from .config import DistinguishedName
from .errors import SigningFailure

CRYPTO_ERRORS = (ValueError, TypeError, UnsupportedAlgorithm)


class CryptoProvider:
    """RSA/SHA-256 key generation, CSR creation and signing backed by ``cryptography``.

    Any failure is raised as SigningFailure with the original exception chained.
    """

    def generate_key(self, key_size: int) -> bytes:
        """Return a new RSA private key as PKCS8 PEM."""
        try:
            return serialize_private_key(generate_private_key(key_size))
        except CRYPTO_ERRORS as e:
            raise SigningFailure(f"failed to generate {key_size}-bit private key: {e}") from e

    def self_sign(self, key_pem: bytes, subject: DistinguishedName, validity_days: int) -> bytes:
        """Return a self-signed Root CA certificate PEM."""
        try:
            cert = CertificateBuilder.build_root_ca(
                subject_dn=subject,
                private_key=deserialize_private_key(key_pem),
                validity_days=validity_days,
            )
        except CRYPTO_ERRORS as e:
            raise SigningFailure(f"failed to self-sign {subject.common_name}: {e}") from e
        return serialize_certificate(cert)

    def create_csr(
        self,
        key_pem: bytes,
        subject: DistinguishedName,
        san_names: list[str] | None = None,
    ) -> bytes:
        """Return a CSR PEM for ``subject``, with SAN entries when given."""
        try:
            csr = CertificateBuilder.build_csr(
                subject_dn=subject,
                private_key=deserialize_private_key(key_pem),
                san_names=san_names,
            )
        except CRYPTO_ERRORS as e:
            raise SigningFailure(f"failed to create CSR for {subject.common_name}: {e}") from e
        return serialize_csr(csr)

    def sign_intermediate(
        self,
        csr_pem: bytes,
        root_cert_pem: bytes,
        root_key_pem: bytes,
        validity_days: int,
    ) -> bytes:
        """Sign an Intermediate CA CSR with the Root key (CA:true, pathlen:0)."""
        try:
            cert = CertificateBuilder.build_intermediate_ca(
                csr=deserialize_csr(csr_pem),
                root_cert=deserialize_certificate(root_cert_pem),
                root_key=deserialize_private_key(root_key_pem),
                validity_days=validity_days,
            )
        except CRYPTO_ERRORS as e:
            raise SigningFailure(f"failed to sign intermediate CA certificate: {e}") from e
        return serialize_certificate(cert)

    def sign_host(
        self,
        csr_pem: bytes,
        issuer_cert_pem: bytes,
        issuer_key_pem: bytes,
        validity_days: int,
    ) -> bytes:
        """Sign a host CSR with the Intermediate key."""
        try:
            cert = CertificateBuilder.build_host_certificate(
                csr=deserialize_csr(csr_pem),
                issuer_cert=deserialize_certificate(issuer_cert_pem),
                issuer_key=deserialize_private_key(issuer_key_pem),
                validity_days=validity_days,
            )
        except CRYPTO_ERRORS as e:
            raise SigningFailure(f"failed to sign host certificate: {e}") from e
        return serialize_certificate(cert)
