"""Tests for the certgen command-line entry point."""

from collections.abc import Generator
from pathlib import Path
from unittest.mock import patch

import pytest

from certgen.scripts.generate_certs import build_config, build_parser, main
from certgen.tests.fakes import FakeProvider


@pytest.fixture
def provider() -> Generator[FakeProvider]:
    """Replace the cryptography-backed provider used by main()."""
    fake = FakeProvider()
    with patch("certgen.scripts.generate_certs.CryptoProvider", return_value=fake):
        yield fake


class TestNonInteractive:
    """Tests for main() with -y."""

    def test_ca_only_run(self, provider: FakeProvider, tmp_path: Path) -> None:
        exit_code = main(["-d", "lab.test", "-y", "--base-dir", str(tmp_path)])

        domain_dir = tmp_path / "domains" / "lab.test"
        assert exit_code == 0
        assert (domain_dir / "ca" / "ca.crt").exists()
        assert (domain_dir / "intermediate" / "ca-chain.crt").exists()
        assert list((domain_dir / "certs").iterdir()) == []

    def test_default_domain(self, provider: FakeProvider, tmp_path: Path) -> None:
        assert main(["-y", "--base-dir", str(tmp_path)]) == 0
        assert (tmp_path / "domains" / "lan" / "ca" / "ca.key").exists()

    def test_wildcard_host_with_alt_names(self, provider: FakeProvider, tmp_path: Path) -> None:
        argv = ["-d", "lab.test", "-n", "*", "-a", "api.lab.test *", "-y"]
        exit_code = main(argv + ["--base-dir", str(tmp_path)])

        certs_dir = tmp_path / "domains" / "lab.test" / "certs"
        assert exit_code == 0
        assert sorted(p.name for p in certs_dir.iterdir()) == [
            "wildcard.lab.test-fullchain.crt",
            "wildcard.lab.test.crt",
            "wildcard.lab.test.csr",
            "wildcard.lab.test.key",
        ]
        assert (
            "create_csr",
            "*.lab.test",
            ["*.lab.test", "api.lab.test", "*.lab.test"],
        ) in provider.calls

    def test_alt_names_without_hostname_fails_fast(
        self, provider: FakeProvider, tmp_path: Path
    ) -> None:
        """MissingHostname is raised before anything is written."""
        argv = ["-d", "lab.test", "-a", "api.lab.test", "-y"]
        exit_code = main(argv + ["--base-dir", str(tmp_path)])

        assert exit_code == 1
        assert not (tmp_path / "domains").exists()
        assert provider.calls == []

    def test_missing_parent_fails(self, provider: FakeProvider, tmp_path: Path) -> None:
        argv = ["-d", "dev.lab.test", "-n", "www", "-p", "lab.test", "-y"]
        exit_code = main(argv + ["--base-dir", str(tmp_path)])

        assert exit_code == 1
        assert not (tmp_path / "domains" / "dev.lab.test" / "certs").exists()

    def test_child_domain_reuses_parent_ca(self, provider: FakeProvider, tmp_path: Path) -> None:
        assert main(["-d", "lab.test", "-y", "--base-dir", str(tmp_path)]) == 0
        provider.calls.clear()

        argv = ["-d", "dev.lab.test", "-n", "www", "-p", "lab.test", "-y"]
        exit_code = main(argv + ["--base-dir", str(tmp_path)])

        child_dir = tmp_path / "domains" / "dev.lab.test"
        assert exit_code == 0
        assert sorted(p.name for p in child_dir.iterdir()) == ["certs"]
        assert (child_dir / "certs" / "www.dev.lab.test-fullchain.crt").exists()
        assert "self_sign" not in provider.call_names
        assert "sign_intermediate" not in provider.call_names

    def test_signing_failure_exits_1(self, provider: FakeProvider, tmp_path: Path) -> None:
        provider.fail_on = "self_sign"
        assert main(["-d", "lab.test", "-y", "--base-dir", str(tmp_path)]) == 1


class TestInteractive:
    """Tests for main() prompting for missing values."""

    def test_prompts_for_domain_host_and_alt_names(
        self, provider: FakeProvider, tmp_path: Path
    ) -> None:
        answers = ["lab.test", "y", "www", "y", "api.lab.test", "*", ""]

        with patch("builtins.input", side_effect=answers):
            exit_code = main(["--base-dir", str(tmp_path)])

        assert exit_code == 0
        assert (tmp_path / "domains" / "lab.test" / "certs" / "www.lab.test.crt").exists()
        assert (
            "create_csr",
            "www.lab.test",
            ["www.lab.test", "api.lab.test", "*.lab.test"],
        ) in provider.calls

    def test_declining_host_certificate(self, provider: FakeProvider, tmp_path: Path) -> None:
        with patch("builtins.input", side_effect=["", "n"]):
            exit_code = main(["--base-dir", str(tmp_path)])

        assert exit_code == 0
        assert (tmp_path / "domains" / "lan" / "intermediate" / "intermediate.crt").exists()
        assert "sign_host" not in provider.call_names

    def test_cli_alt_names_skip_prompt(self, provider: FakeProvider, tmp_path: Path) -> None:
        with patch("builtins.input", side_effect=AssertionError("unexpected prompt")):
            exit_code = main(
                ["-d", "lab.test", "-n", "www", "-a", "api", "--base-dir", str(tmp_path)]
            )

        assert exit_code == 0
        assert ("create_csr", "www.lab.test", ["www.lab.test", "api"]) in provider.calls


class TestBuildConfig:
    """Tests for command-line subject overrides."""

    def test_overrides_applied(self) -> None:
        args = build_parser().parse_args(
            ["--country", "US", "--state", "CA", "--city", "SF", "--org", "Acme"]
        )

        config = build_config(args)

        assert config.country == "US"
        assert config.state == "CA"
        assert config.locality == "SF"
        assert config.host_organization == "Acme"
        assert config.root_organization == "Root CA Organization"

    def test_defaults_kept(self) -> None:
        config = build_config(build_parser().parse_args([]))

        assert config.country == "AR"
        assert config.root_key_size == 4096
        assert config.host_validity_days == 825
