"""Test fixtures for certgen tests."""

from pathlib import Path

import pytest
from cryptography import x509
from cryptography.hazmat.primitives.asymmetric.rsa import RSAPrivateKey

from certgen.lib.cert_utils import (
    create_chain_bundle,
    generate_private_key,
    serialize_certificate,
    serialize_private_key,
)
from certgen.lib.certificate_builder import CertificateBuilder
from certgen.lib.config import CertgenConfig
from certgen.lib.storage import FileSystemStore
from certgen.tests.fakes import FakeProvider, MemoryStore


@pytest.fixture
def certgen_config() -> CertgenConfig:
    """Return test configuration with smaller CA keys."""
    return CertgenConfig(
        root_organization="Test Root Org",
        intermediate_organization="Test Intermediate Org",
        host_organization="Test Host Org",
        root_key_size=2048,  # Faster for tests
        intermediate_key_size=2048,
        host_key_size=2048,
    )


@pytest.fixture
def fs_store() -> FileSystemStore:
    return FileSystemStore()


@pytest.fixture
def memory_store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def fake_provider() -> FakeProvider:
    return FakeProvider()


@pytest.fixture
def root_key() -> RSAPrivateKey:
    """Generate RSA private key for Root CA."""
    return generate_private_key(key_size=2048)


@pytest.fixture
def root_cert(root_key: RSAPrivateKey, certgen_config: CertgenConfig) -> x509.Certificate:
    """Generate self-signed Root CA certificate."""
    return CertificateBuilder.build_root_ca(
        subject_dn=certgen_config.root_subject("example.com"),
        private_key=root_key,
        validity_days=30,
    )


@pytest.fixture
def intermediate_key() -> RSAPrivateKey:
    """Generate RSA private key for Intermediate CA."""
    return generate_private_key(key_size=2048)


@pytest.fixture
def intermediate_csr(
    intermediate_key: RSAPrivateKey,
    certgen_config: CertgenConfig,
) -> x509.CertificateSigningRequest:
    """Generate Intermediate CA CSR."""
    return CertificateBuilder.build_csr(
        subject_dn=certgen_config.intermediate_subject("example.com"),
        private_key=intermediate_key,
    )


@pytest.fixture
def intermediate_cert(
    intermediate_csr: x509.CertificateSigningRequest,
    root_cert: x509.Certificate,
    root_key: RSAPrivateKey,
) -> x509.Certificate:
    """Generate Intermediate CA certificate signed by Root CA."""
    return CertificateBuilder.build_intermediate_ca(
        csr=intermediate_csr,
        root_cert=root_cert,
        root_key=root_key,
        validity_days=30,
    )


@pytest.fixture
def host_key() -> RSAPrivateKey:
    return generate_private_key(key_size=2048)


@pytest.fixture
def host_csr(
    host_key: RSAPrivateKey,
    certgen_config: CertgenConfig,
) -> x509.CertificateSigningRequest:
    """Generate host CSR for www.example.com with one extra SAN."""
    return CertificateBuilder.build_csr(
        subject_dn=certgen_config.host_subject("www.example.com"),
        private_key=host_key,
        san_names=["www.example.com", "api.example.com"],
    )


@pytest.fixture
def host_cert(
    host_csr: x509.CertificateSigningRequest,
    intermediate_cert: x509.Certificate,
    intermediate_key: RSAPrivateKey,
) -> x509.Certificate:
    """Generate host certificate signed by Intermediate CA."""
    return CertificateBuilder.build_host_certificate(
        csr=host_csr,
        issuer_cert=intermediate_cert,
        issuer_key=intermediate_key,
        validity_days=30,
    )


@pytest.fixture
def parent_domain_on_disk(
    tmp_path: Path,
    root_key: RSAPrivateKey,
    root_cert: x509.Certificate,
    intermediate_key: RSAPrivateKey,
    intermediate_cert: x509.Certificate,
) -> Path:
    """Write a complete CA hierarchy for example.com and return the base directory.

    Creates:
        {tmp}/domains/example.com/ca/ca.key, ca.crt
        {tmp}/domains/example.com/intermediate/intermediate.key, intermediate.crt, ca-chain.crt
    """
    ca_dir = tmp_path / "domains" / "example.com" / "ca"
    intermediate_dir = tmp_path / "domains" / "example.com" / "intermediate"
    ca_dir.mkdir(parents=True)
    intermediate_dir.mkdir(parents=True)

    root_pem = serialize_certificate(root_cert)
    intermediate_pem = serialize_certificate(intermediate_cert)

    (ca_dir / "ca.key").write_bytes(serialize_private_key(root_key))
    (ca_dir / "ca.crt").write_bytes(root_pem)
    (intermediate_dir / "intermediate.key").write_bytes(serialize_private_key(intermediate_key))
    (intermediate_dir / "intermediate.crt").write_bytes(intermediate_pem)
    (intermediate_dir / "ca-chain.crt").write_bytes(create_chain_bundle(intermediate_pem, root_pem))

    return tmp_path
