"""Shared fixtures."""

import pytest

from pmavhost.models.config import PhpMyAdminConfig, ParamsConfig


@pytest.fixture
def config():
    """Debian defaults."""
    return PhpMyAdminConfig()


@pytest.fixture
def tmp_config(tmp_path):
    """Configuration whose directories all live under tmp_path."""
    docroot = tmp_path / "usr/share/phpmyadmin"
    docroot.mkdir(parents=True)
    return PhpMyAdminConfig(
        params=ParamsConfig(
            docroot=str(docroot),
            conf_dir=str(tmp_path / "sites-available"),
            conf_dir_enable=str(tmp_path / "sites-enabled"),
        )
    )
