"""Tests for VHostProvider."""

import pytest

from pmavhost.models.declarations import RewriteRule, VHostDeclaration
from pmavhost.providers.base import ProviderStatus
from pmavhost.providers.vhost import VHostProvider
from pmavhost.vhost.definition import define_vhost


@pytest.fixture
def provider():
    provider = VHostProvider()
    provider.initialize(None)
    return provider


def _tls_catalog(tmp_config, **params):
    values = {
        "ssl": True,
        "ssl_cert_file": "/etc/ssl/pma.crt",
        "ssl_key_file": "/etc/ssl/pma.key",
        "aliases": ["db.example.com"],
    }
    values.update(params)
    return define_vhost("pma.example.com", values, tmp_config)


class TestRender:
    """Test rendering of site configurations."""

    def test_tls_host(self, provider, tmp_config):
        text = provider.render(_tls_catalog(tmp_config, ssl_ca_file="/etc/ssl/ca.crt").primary)

        assert "<VirtualHost *:443>" in text
        assert "ServerName pma.example.com" in text
        assert "ServerAlias db.example.com" in text
        assert "SSLEngine on" in text
        assert "SSLCertificateFile /etc/ssl/pma.crt" in text
        assert "SSLCertificateKeyFile /etc/ssl/pma.key" in text
        assert "SSLCACertificateFile /etc/ssl/ca.crt" in text
        assert "SSLHonorCipherOrder On" in text
        assert "Options Indexes FollowSymLinks MultiViews" in text
        assert "## Custom fragment" in text

    def test_tls_host_without_ca(self, provider, tmp_config):
        text = provider.render(_tls_catalog(tmp_config).primary)
        assert "SSLCACertificateFile" not in text

    def test_redirect_host(self, provider, tmp_config):
        text = provider.render(_tls_catalog(tmp_config, ssl_redirect=True).redirect)

        assert "<VirtualHost *:80>" in text
        assert "ServerName pma.example.com\n" in text
        assert "RewriteEngine On" in text
        assert "RewriteCond %{HTTPS} off" in text
        assert "RewriteRule (.*) https://%{HTTP_HOST}%{REQUEST_URI}" in text
        assert "SSLEngine" not in text

    def test_plain_host(self, provider, tmp_config):
        text = provider.render(define_vhost("pma", {}, tmp_config).primary)

        assert "<VirtualHost *:80>" in text
        assert "SSLEngine" not in text
        assert "RewriteEngine" not in text


class TestConverge:
    """Test writing, enabling and removing site files."""

    def test_present_writes_and_enables(self, provider, tmp_config, tmp_path):
        spec = define_vhost("pma", {}, tmp_config).primary

        assert provider.status(spec) == ProviderStatus.ABSENT
        assert provider.present(spec) is True

        site = tmp_path / "sites-available" / "20-pma.conf"
        link = tmp_path / "sites-enabled" / "20-pma.conf"
        assert site.read_text() == provider.render(spec)
        assert link.is_symlink()
        assert link.resolve() == site.resolve()
        assert provider.status(spec) == ProviderStatus.PRESENT
        assert provider.present(spec) is False

    def test_disabled_host_not_linked(self, provider, tmp_config, tmp_path):
        enabled = define_vhost("pma", {}, tmp_config).primary
        provider.present(enabled)

        disabled = define_vhost("pma", {"vhost_enabled": False}, tmp_config).primary
        assert provider.status(disabled) == ProviderStatus.UNKNOWN
        assert provider.present(disabled) is True

        assert (tmp_path / "sites-available" / "20-pma.conf").exists()
        assert not (tmp_path / "sites-enabled" / "20-pma.conf").exists()
        assert provider.status(disabled) == ProviderStatus.PRESENT

    def test_same_enable_dir_not_linked(self, provider, tmp_path):
        conf = tmp_path / "conf.d"
        spec = VHostDeclaration(
            name="pma",
            docroot="/usr/share/phpMyAdmin",
            priority="20",
            port=80,
            conf_dir=str(conf),
            conf_dir_enable=str(conf),
        )

        provider.present(spec)
        assert (conf / "20-pma.conf").is_file()
        assert not (conf / "20-pma.conf").is_symlink()
        assert provider.is_enabled(spec)

    def test_absent_removes_site_and_link(self, provider, tmp_config, tmp_path):
        spec = define_vhost("pma", {}, tmp_config).primary
        provider.present(spec)

        assert provider.absent(spec) is True
        assert not (tmp_path / "sites-available" / "20-pma.conf").exists()
        assert not (tmp_path / "sites-enabled" / "20-pma.conf").is_symlink()
        assert provider.absent(spec) is False

    def test_validate_spec(self, provider, tmp_config):
        spec = _tls_catalog(tmp_config).primary
        assert provider.validate_spec(spec) is True

        broken = spec.model_copy(update={"ssl_cert": None})
        assert provider.validate_spec(broken) is False

    def test_validate_spec_rejects_escaping_filename(self, provider, tmp_config):
        spec = define_vhost("pma", {}, tmp_config).primary
        escaping = spec.model_copy(update={"priority": "../../escaped"})

        assert provider.validate_spec(escaping) is False

    def test_redirect_validates(self, provider):
        spec = VHostDeclaration(
            name="pma-http",
            docroot="/usr/share/phpmyadmin",
            priority="20",
            port=80,
            rewrites=[RewriteRule(condition="%{HTTPS} off", rule="(.*) https://%{HTTP_HOST}")],
            conf_dir="/etc/apache2/sites-available",
            conf_dir_enable="/etc/apache2/sites-enabled",
        )
        assert provider.validate_spec(spec) is True
