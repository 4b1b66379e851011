"""CA manager for Root and Intermediate CA lifecycle."""

from .cert_utils import create_chain_bundle
from .config import CertgenConfig
from .crypto_provider import CryptoProvider
from .errors import MissingRootCA
from .layout import DomainLayout
from .logging_config import LOGGER
from .models import HierarchyResult, Tier, TierResult, TierState
from .storage import FileSystemStore, tier_state


class CAManager:
    """Ensures a domain's Root CA, Intermediate CA and CA chain exist.

    CA tiers are idempotent: a tier whose key and certificate are both on
    disk is reused as-is and never regenerated.
    """

    def __init__(
        self,
        config: CertgenConfig,
        store: FileSystemStore | None = None,
        provider: CryptoProvider | None = None,
    ) -> None:
        """Initialize CA manager.

        Args:
            config: Subject defaults, key sizes and validity periods
            store: Storage backend (default: local filesystem)
            provider: Cryptographic backend (default: ``cryptography``)
        """
        self.config = config
        self.store = store or FileSystemStore()
        self.provider = provider or CryptoProvider()

    def root_state(self, layout: DomainLayout) -> TierState:
        return tier_state(self.store, layout.root_key_path, layout.root_cert_path)

    def intermediate_state(self, layout: DomainLayout) -> TierState:
        return tier_state(self.store, layout.intermediate_key_path, layout.intermediate_cert_path)

    def ensure_hierarchy(self, layout: DomainLayout) -> HierarchyResult:
        """Ensure Root, then Intermediate, then the CA chain for ``layout``.

        Domains that borrow a parent's CA are skipped entirely; the layout
        resolver has already verified the parent material.

        Runs under the owning domain's advisory lock.
        """
        if not layout.owns_ca:
            LOGGER.info(
                "Using existing Root and Intermediate CA from parent domain %s",
                layout.parent_domain,
            )
            return HierarchyResult(
                domain=layout.domain,
                root=None,
                intermediate=None,
                chain_path=layout.chain_path,
            )

        with self.store.lock(layout.lock_path):
            root = self.ensure_root_ca(layout)
            intermediate = self.ensure_intermediate_ca(layout)
            chain_created = self.ensure_ca_chain(layout)

        return HierarchyResult(
            domain=layout.domain,
            root=root,
            intermediate=intermediate,
            chain_path=layout.chain_path,
            chain_created=chain_created,
        )

    def ensure_root_ca(self, layout: DomainLayout) -> TierResult:
        """Generate the self-signed Root CA unless ca.key and ca.crt both exist.

        Raises:
            SigningFailure: If key generation or self-signing fails
            FileSystemError: If an artifact cannot be written
        """
        key_path = layout.root_key_path
        cert_path = layout.root_cert_path

        if self.root_state(layout) is TierState.PRESENT:
            LOGGER.info("CA files for domain %s already exist, using existing ones", layout.domain)
            return TierResult(tier=Tier.ROOT, key_path=key_path, cert_path=cert_path, created=False)

        LOGGER.info("Generating Root CA certificate for domain %s", layout.domain)
        key_pem = self.provider.generate_key(self.config.root_key_size)
        self.store.write_private_key(key_path, key_pem)

        cert_pem = self.provider.self_sign(
            key_pem,
            self.config.root_subject(layout.domain),
            self.config.root_validity_days,
        )
        self.store.write_bytes(cert_path, cert_pem)

        LOGGER.info("Root CA private key: %s", key_path)
        LOGGER.info("Root CA certificate: %s", cert_path)
        return TierResult(tier=Tier.ROOT, key_path=key_path, cert_path=cert_path, created=True)

    def ensure_intermediate_ca(self, layout: DomainLayout) -> TierResult:
        """Generate the Intermediate CA, signed by the Root, unless already present.

        A freshly generated Intermediate always gets a new ca-chain.crt.

        Raises:
            MissingRootCA: If the Root CA is not present
            SigningFailure: If key generation, CSR creation or signing fails
            FileSystemError: If an artifact cannot be read or written
        """
        key_path = layout.intermediate_key_path
        cert_path = layout.intermediate_cert_path

        if self.intermediate_state(layout) is TierState.PRESENT:
            LOGGER.info(
                "Intermediate CA files for domain %s already exist, using existing ones",
                layout.domain,
            )
            return TierResult(
                tier=Tier.INTERMEDIATE, key_path=key_path, cert_path=cert_path, created=False
            )

        if self.root_state(layout) is TierState.MISSING:
            raise MissingRootCA(
                f"root CA for domain {layout.domain} not found in {layout.ca_dir}"
            )

        LOGGER.info("Generating Intermediate CA certificate for domain %s", layout.domain)
        key_pem = self.provider.generate_key(self.config.intermediate_key_size)
        self.store.write_private_key(key_path, key_pem)

        csr_pem = self.provider.create_csr(key_pem, self.config.intermediate_subject(layout.domain))
        self.store.write_bytes(layout.intermediate_csr_path, csr_pem)

        cert_pem = self.provider.sign_intermediate(
            csr_pem,
            self.store.read_bytes(layout.root_cert_path),
            self.store.read_bytes(layout.root_key_path),
            self.config.intermediate_validity_days,
        )
        self.store.write_bytes(cert_path, cert_pem)
        self._write_ca_chain(layout)

        LOGGER.info("Intermediate CA private key: %s", key_path)
        LOGGER.info("Intermediate CA certificate: %s", cert_path)
        return TierResult(
            tier=Tier.INTERMEDIATE, key_path=key_path, cert_path=cert_path, created=True
        )

    def ensure_ca_chain(self, layout: DomainLayout) -> bool:
        """Rebuild ca-chain.crt (intermediate + root) if it is absent.

        Returns:
            True if the chain file was written by this call
        """
        if self.store.exists(layout.chain_path):
            return False
        self._write_ca_chain(layout)
        return True

    def _write_ca_chain(self, layout: DomainLayout) -> None:
        bundle = create_chain_bundle(
            self.store.read_bytes(layout.intermediate_cert_path),
            self.store.read_bytes(layout.root_cert_path),
        )
        self.store.write_bytes(layout.chain_path, bundle)
        LOGGER.info("Certificate chain created: %s", layout.chain_path)
