"""Leaf (host) certificate issuance against a domain's Intermediate CA."""

from .cert_utils import create_chain_bundle
from .config import CertgenConfig
from .crypto_provider import CryptoProvider
from .errors import MissingIntermediateCA
from .layout import DomainLayout
from .logging_config import LOGGER
from .models import HostCertResult, TierState
from .names import build_fqdn, build_san_list, cert_filename_stem
from .storage import FileSystemStore, tier_state


class HostCertificateIssuer:
    """Issues host certificates signed by the Intermediate CA.

    Unlike the CA tiers, issuance is not idempotent: every call generates a
    new key pair and overwrites the previous key, certificate and chain.
    """

    def __init__(
        self,
        config: CertgenConfig,
        store: FileSystemStore | None = None,
        provider: CryptoProvider | None = None,
    ) -> None:
        self.config = config
        self.store = store or FileSystemStore()
        self.provider = provider or CryptoProvider()

    def issue(
        self,
        layout: DomainLayout,
        hostname: str | None,
        alt_names: list[str] | None = None,
    ) -> HostCertResult | None:
        """Issue a certificate for ``hostname`` within ``layout.domain``.

        Args:
            layout: Resolved domain layout (own or parent CA directories)
            hostname: Hostname token (``www``, ``*``, ``*.sub.example.com``, FQDN)
            alt_names: Extra DNS names, each wildcard-normalized

        Returns:
            HostCertResult, or None when no hostname was given

        Raises:
            MissingIntermediateCA: If the Intermediate CA key or certificate is absent
            SigningFailure: If key generation, CSR creation or signing fails
            FileSystemError: If an artifact cannot be read or written
        """
        if not hostname:
            LOGGER.info("No hostname provided, skipping host certificate generation")
            return None

        fqdn = build_fqdn(hostname, layout.domain)
        stem = cert_filename_stem(fqdn)
        san_names = build_san_list(fqdn, alt_names, layout.domain)

        if (
            tier_state(self.store, layout.intermediate_key_path, layout.intermediate_cert_path)
            is TierState.MISSING
        ):
            raise MissingIntermediateCA(
                f"intermediate CA key or certificate not found in {layout.intermediate_dir}"
            )

        LOGGER.info("Generating certificate for %s", fqdn)

        key_path = layout.host_key_path(stem)
        csr_path = layout.host_csr_path(stem)
        cert_path = layout.host_cert_path(stem)
        fullchain_path = layout.host_fullchain_path(stem)

        key_pem = self.provider.generate_key(self.config.host_key_size)
        self.store.write_private_key(key_path, key_pem)

        csr_pem = self.provider.create_csr(key_pem, self.config.host_subject(fqdn), san_names)
        self.store.write_bytes(csr_path, csr_pem)

        intermediate_cert_pem = self.store.read_bytes(layout.intermediate_cert_path)
        cert_pem = self.provider.sign_host(
            csr_pem,
            intermediate_cert_pem,
            self.store.read_bytes(layout.intermediate_key_path),
            self.config.host_validity_days,
        )
        self.store.write_bytes(cert_path, cert_pem)

        # Order is leaf, intermediate, root
        fullchain = create_chain_bundle(
            cert_pem,
            intermediate_cert_pem,
            self.store.read_bytes(layout.root_cert_path),
        )
        self.store.write_bytes(fullchain_path, fullchain)

        LOGGER.info("Private key: %s", key_path)
        LOGGER.info("Certificate: %s", cert_path)
        LOGGER.info("Full chain (host + intermediate + CA): %s", fullchain_path)

        return HostCertResult(
            fqdn=fqdn,
            stem=stem,
            san_names=san_names,
            key_path=key_path,
            csr_path=csr_path,
            cert_path=cert_path,
            fullchain_path=fullchain_path,
        )
