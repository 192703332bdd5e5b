"""Tests for configuration directory loading."""

import pytest

from pmavhost.config import ConfigManager
from pmavhost.errors import ConfigError, InvalidTypeError


@pytest.fixture
def config_dir(tmp_path):
    """Create a temporary config directory structure."""
    (tmp_path / "vhosts").mkdir()
    (tmp_path / "config.yaml").write_text("""
params:
  osfamily: RedHat
  docroot: /srv/phpmyadmin
logging:
  level: debug
""")
    (tmp_path / "vhosts" / "pma.yaml").write_text("""
pma.example.com:
  ssl: true
  ssl_cert_file: /etc/pki/tls/certs/pma.crt
  ssl_key_file: /etc/pki/tls/private/pma.key
  ssl_redirect: true
  aliases:
    - db.example.com
plain.example.com:
""")
    return tmp_path


class TestConfigManager:
    """Test ConfigManager loading."""

    def test_load(self, config_dir):
        manager = ConfigManager(config_dir)
        manager.load()

        assert manager.config.params.osfamily == "RedHat"
        assert manager.config.params.conf_dir == "/etc/httpd/conf.d"
        assert manager.config.logging.level == "DEBUG"
        assert set(manager.vhosts) == {"pma.example.com", "plain.example.com"}
        assert manager.get_vhost_params("plain.example.com") == {}
        assert manager.get_vhost_params("missing") is None

    def test_defaults_without_main_config(self, tmp_path):
        manager = ConfigManager(tmp_path)
        manager.load()

        assert manager.config.params.osfamily == "Debian"
        assert manager.vhosts == {}

    def test_catalogs(self, config_dir):
        manager = ConfigManager(config_dir)
        manager.load()

        catalogs = {c.title: c for c in manager.catalogs()}
        tls = catalogs["pma.example.com"]
        assert tls.primary.port == 443
        assert tls.primary.docroot == "/srv/phpmyadmin"
        assert tls.primary.ssl_cert == "/etc/pki/tls/certs/pma.crt"
        assert tls.redirect is not None
        assert tls.install.package == "phpMyAdmin"
        assert catalogs["plain.example.com"].primary.port == 80

    def test_define_with_overrides(self, config_dir):
        manager = ConfigManager(config_dir)
        manager.load()

        catalog = manager.define("pma.example.com", {"ssl_redirect": False})
        assert catalog.redirect is None

    def test_invalid_vhost_raises(self, config_dir):
        (config_dir / "vhosts" / "bad.yaml").write_text("bad.example.com:\n  ssl: 'yes'\n")
        manager = ConfigManager(config_dir)
        manager.load()

        with pytest.raises(InvalidTypeError):
            manager.catalogs()

    def test_duplicate_title(self, config_dir):
        (config_dir / "vhosts" / "more.yaml").write_text("pma.example.com:\n  ssl: false\n")
        manager = ConfigManager(config_dir)

        with pytest.raises(ConfigError, match="Duplicate vhost"):
            manager.load()

    def test_unparseable_yaml(self, config_dir):
        (config_dir / "vhosts" / "broken.yaml").write_text("key: [unclosed\n")
        manager = ConfigManager(config_dir)

        with pytest.raises(ConfigError, match="broken.yaml"):
            manager.load()

    def test_invalid_main_config(self, config_dir):
        (config_dir / "config.yaml").write_text("params:\n  osfamily: Gentoo\n")
        manager = ConfigManager(config_dir)

        with pytest.raises(ConfigError, match="Invalid main config"):
            manager.load()

    def test_vhost_must_be_mapping(self, config_dir):
        (config_dir / "vhosts" / "list.yaml").write_text("other.example.com: [1, 2]\n")
        manager = ConfigManager(config_dir)

        with pytest.raises(ConfigError, match="must be a mapping"):
            manager.load()

    def test_duplicate_title_across_key_types(self, config_dir):
        (config_dir / "vhosts" / "a.yaml").write_text("1:\n  ssl: false\n")
        (config_dir / "vhosts" / "b.yaml").write_text("'1':\n  ssl: true\n")
        manager = ConfigManager(config_dir)

        with pytest.raises(ConfigError, match="Duplicate vhost '1'"):
            manager.load()

    def test_unreadable_file(self, config_dir):
        (config_dir / "vhosts" / "dir.yaml").mkdir()
        manager = ConfigManager(config_dir)

        with pytest.raises(ConfigError, match="Error reading .*dir.yaml"):
            manager.load()
