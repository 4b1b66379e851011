"""Certificate hierarchy configuration dataclasses."""

from dataclasses import dataclass

from cryptography import x509
from cryptography.x509 import oid


@dataclass
class CertgenConfig:
    """Subject defaults, key sizes and validity periods for every tier.

    Country, state, locality and host_organization can be overridden from the
    command line. Everything else is fixed per installation.
    """

    country: str = "AR"
    state: str = "Buenos Aires"
    locality: str = "CABA"
    root_organization: str = "Root CA Organization"
    root_organizational_unit: str = "Root CA Org Unit"
    intermediate_organization: str = "Intermediate CA Organization"
    intermediate_organizational_unit: str = "Intermediate Org Unit"
    host_organization: str = "Host Organization"
    host_organizational_unit: str = "Host Org Unit"
    root_common_name: str = "Root CA"
    intermediate_common_name: str = "Intermediate CA"
    default_domain: str = "lan"
    domains_dir_name: str = "domains"
    root_validity_days: int = 3650
    intermediate_validity_days: int = 1825
    host_validity_days: int = 825
    root_key_size: int = 4096
    intermediate_key_size: int = 4096
    host_key_size: int = 2048

    def root_subject(self, domain: str) -> "DistinguishedName":
        """Subject for the Root CA of ``domain`` (CN ``Root CA.<domain>``)."""
        return DistinguishedName(
            country=self.country,
            state=self.state,
            locality=self.locality,
            organization=self.root_organization,
            organizational_unit=self.root_organizational_unit,
            common_name=f"{self.root_common_name}.{domain}",
        )

    def intermediate_subject(self, domain: str) -> "DistinguishedName":
        """Subject for the Intermediate CA of ``domain``."""
        return DistinguishedName(
            country=self.country,
            state=self.state,
            locality=self.locality,
            organization=self.intermediate_organization,
            organizational_unit=self.intermediate_organizational_unit,
            common_name=f"{self.intermediate_common_name}.{domain}",
        )

    def host_subject(self, fqdn: str) -> "DistinguishedName":
        """Subject for a host certificate, CN is the primary FQDN."""
        return DistinguishedName(
            country=self.country,
            state=self.state,
            locality=self.locality,
            organization=self.host_organization,
            organizational_unit=self.host_organizational_unit,
            common_name=fqdn,
        )


@dataclass
class DistinguishedName:
    """X.509 Subject Distinguished Name."""

    country: str
    state: str
    locality: str
    organization: str
    organizational_unit: str
    common_name: str

    def to_x509_name(self) -> x509.Name:
        """Convert to cryptography x509.Name for certificate generation."""
        return x509.Name(
            [
                x509.NameAttribute(oid.NameOID.COUNTRY_NAME, self.country),
                x509.NameAttribute(oid.NameOID.STATE_OR_PROVINCE_NAME, self.state),
                x509.NameAttribute(oid.NameOID.LOCALITY_NAME, self.locality),
                x509.NameAttribute(oid.NameOID.ORGANIZATION_NAME, self.organization),
                x509.NameAttribute(oid.NameOID.ORGANIZATIONAL_UNIT_NAME, self.organizational_unit),
                x509.NameAttribute(oid.NameOID.COMMON_NAME, self.common_name),
            ]
        )
