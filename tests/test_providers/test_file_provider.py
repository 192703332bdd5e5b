"""Tests for FileProvider."""

import stat

import pytest

from pmavhost.errors import ProviderError
from pmavhost.models.declarations import FileArtifact
from pmavhost.providers.base import ProviderStatus
from pmavhost.providers.file import FileProvider


@pytest.fixture
def provider():
    provider = FileProvider()
    provider.initialize(None)
    return provider


class TestFileProvider:
    """Test writing and removing materialised files."""

    def test_present_writes_content_and_mode(self, provider, tmp_path):
        path = tmp_path / "conf" / "phpmyadmin_pma.crt"
        spec = FileArtifact(path=str(path), content="CERT\n")

        assert provider.status(spec) == ProviderStatus.ABSENT
        assert provider.present(spec) is True

        assert path.read_text() == "CERT\n"
        assert stat.S_IMODE(path.stat().st_mode) == 0o644
        assert provider.status(spec) == ProviderStatus.PRESENT

    def test_present_is_idempotent(self, provider, tmp_path):
        spec = FileArtifact(path=str(tmp_path / "x.key"), content="KEY")
        provider.present(spec)

        assert provider.present(spec) is False

    def test_changed_content_rewritten(self, provider, tmp_path):
        path = tmp_path / "x.crt"
        path.write_text("old")
        spec = FileArtifact(path=str(path), content="new")

        assert provider.status(spec) == ProviderStatus.UNKNOWN
        assert provider.present(spec) is True
        assert path.read_text() == "new"

    def test_mode_corrected(self, provider, tmp_path):
        path = tmp_path / "x.crt"
        path.write_text("same")
        path.chmod(0o600)
        spec = FileArtifact(path=str(path), content="same")

        assert provider.status(spec) == ProviderStatus.UNKNOWN
        provider.present(spec)
        assert stat.S_IMODE(path.stat().st_mode) == 0o644

    def test_absent_removes(self, provider, tmp_path):
        path = tmp_path / "x.crt"
        path.write_text("data")
        spec = FileArtifact(path=str(path), ensure="absent")

        assert provider.absent(spec) is True
        assert not path.exists()
        assert provider.absent(spec) is False

    def test_write_failure(self, provider, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("")
        spec = FileArtifact(path=str(blocker / "x.crt"), content="data")

        with pytest.raises(ProviderError):
            provider.present(spec)

    def test_validate_spec(self, provider):
        assert provider.validate_spec(FileArtifact(path="/etc/x.crt")) is True
        assert provider.validate_spec(FileArtifact(path="x.crt")) is False
        assert provider.validate_spec(FileArtifact(path="/etc/x.crt", mode="rw")) is False
