"""Certificate builder for X.509 certificate construction."""

from datetime import datetime, timedelta, timezone

from cryptography import x509
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric.rsa import RSAPrivateKey, RSAPublicKey
from cryptography.x509.oid import ExtendedKeyUsageOID

from .cert_utils import (
    extract_csr_public_key,
    extract_san_dns_names,
    generate_serial_number,
    validate_csr_signature,
)
from .config import DistinguishedName

CA_KEY_USAGE = x509.KeyUsage(
    digital_signature=True,
    content_commitment=False,
    key_encipherment=False,
    data_encipherment=False,
    key_agreement=False,
    key_cert_sign=True,
    crl_sign=True,
    encipher_only=False,
    decipher_only=False,
)

HOST_KEY_USAGE = x509.KeyUsage(
    digital_signature=True,
    content_commitment=False,
    key_encipherment=True,
    data_encipherment=False,
    key_agreement=False,
    key_cert_sign=False,
    crl_sign=False,
    encipher_only=False,
    decipher_only=False,
)

HOST_EXTENDED_KEY_USAGE = x509.ExtendedKeyUsage(
    [ExtendedKeyUsageOID.SERVER_AUTH, ExtendedKeyUsageOID.CLIENT_AUTH]
)


def _validity_window(validity_days: int) -> tuple[datetime, datetime]:
    not_before = datetime.now(timezone.utc)
    return not_before, not_before + timedelta(days=validity_days)


def _base_builder(
    subject: x509.Name,
    issuer: x509.Name,
    public_key: RSAPublicKey,
    validity_days: int,
) -> x509.CertificateBuilder:
    not_before, not_after = _validity_window(validity_days)
    return (
        x509.CertificateBuilder()
        .subject_name(subject)
        .issuer_name(issuer)
        .public_key(public_key)
        .serial_number(generate_serial_number())
        .not_valid_before(not_before)
        .not_valid_after(not_after)
    )


def _verified_csr_key(csr: x509.CertificateSigningRequest) -> RSAPublicKey:
    if not validate_csr_signature(csr):
        raise ValueError("CSR signature validation failed")
    return extract_csr_public_key(csr)


class CertificateBuilder:
    """Builds X.509 certificates for the Root -> Intermediate -> host hierarchy.

    Every certificate gets a random serial, SHA-256 signature and a validity
    window starting now.
    """

    @staticmethod
    def build_csr(
        subject_dn: DistinguishedName,
        private_key: RSAPrivateKey,
        san_names: list[str] | None = None,
    ) -> x509.CertificateSigningRequest:
        """Build a CSR for ``subject_dn``, with a DNS SAN extension when names are given.

        SAN entries keep the order given, duplicates included.
        """
        builder = x509.CertificateSigningRequestBuilder().subject_name(subject_dn.to_x509_name())
        if san_names:
            builder = builder.add_extension(
                x509.SubjectAlternativeName([x509.DNSName(name) for name in san_names]),
                critical=False,
            )
        return builder.sign(private_key, hashes.SHA256())

    @staticmethod
    def build_root_ca(
        subject_dn: DistinguishedName,
        private_key: RSAPrivateKey,
        validity_days: int,
    ) -> x509.Certificate:
        """Self-sign a Root CA certificate with no path length limit."""
        subject = subject_dn.to_x509_name()
        public_key = private_key.public_key()

        builder = (
            _base_builder(subject, subject, public_key, validity_days)
            .add_extension(x509.BasicConstraints(ca=True, path_length=None), critical=True)
            .add_extension(CA_KEY_USAGE, critical=True)
            .add_extension(x509.SubjectKeyIdentifier.from_public_key(public_key), critical=False)
        )
        return builder.sign(private_key, hashes.SHA256())

    @staticmethod
    def build_intermediate_ca(
        csr: x509.CertificateSigningRequest,
        root_cert: x509.Certificate,
        root_key: RSAPrivateKey,
        validity_days: int,
    ) -> x509.Certificate:
        """Sign an Intermediate CA CSR with the Root CA key.

        The result is limited to pathlen:0 so it can only issue leaf certificates.

        Raises:
            ValueError: If the CSR signature does not verify
        """
        public_key = _verified_csr_key(csr)

        builder = (
            _base_builder(csr.subject, root_cert.subject, public_key, validity_days)
            .add_extension(x509.BasicConstraints(ca=True, path_length=0), critical=True)
            .add_extension(CA_KEY_USAGE, critical=True)
            .add_extension(x509.SubjectKeyIdentifier.from_public_key(public_key), critical=False)
            .add_extension(
                x509.AuthorityKeyIdentifier.from_issuer_public_key(root_key.public_key()),
                critical=False,
            )
        )
        return builder.sign(root_key, hashes.SHA256())

    @staticmethod
    def build_host_certificate(
        csr: x509.CertificateSigningRequest,
        issuer_cert: x509.Certificate,
        issuer_key: RSAPrivateKey,
        validity_days: int,
    ) -> x509.Certificate:
        """Sign a host CSR with the Intermediate CA key for TLS server and client auth.

        The SAN list is copied from the CSR unchanged.

        Raises:
            ValueError: If the CSR signature does not verify or the CSR carries no SAN
        """
        public_key = _verified_csr_key(csr)
        san_names = extract_san_dns_names(csr)
        if not san_names:
            raise ValueError("host CSR must carry at least one DNS subjectAltName")

        builder = (
            _base_builder(csr.subject, issuer_cert.subject, public_key, validity_days)
            .add_extension(x509.BasicConstraints(ca=False, path_length=None), critical=True)
            .add_extension(HOST_KEY_USAGE, critical=False)
            .add_extension(HOST_EXTENDED_KEY_USAGE, critical=False)
            .add_extension(
                x509.SubjectAlternativeName([x509.DNSName(name) for name in san_names]),
                critical=False,
            )
            .add_extension(
                x509.AuthorityKeyIdentifier.from_issuer_public_key(issuer_key.public_key()),
                critical=False,
            )
        )
        return builder.sign(issuer_key, hashes.SHA256())
