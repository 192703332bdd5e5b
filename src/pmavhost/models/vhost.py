"""Virtual host specification models."""

from typing import List, Literal, Optional, Union
from pydantic import BaseModel, ConfigDict, Field


DEFAULT_OPTIONS = ["Indexes", "FollowSymLinks", "MultiViews"]
DEFAULT_SSL_PROTOCOL = "all -SSLv2 -SSLv3"
DEFAULT_SSL_CIPHER = "HIGH:MEDIUM:!aNULL:!MD5:!RC4"


class VHostSpec(BaseModel):
    """Validated parameters of a phpMyAdmin virtual host."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str = Field(..., description="Resource title")
    vhost_name: str = Field(..., description="Server identity")
    ensure: Literal["present", "absent"] = Field(default="present")
    vhost_enabled: bool = Field(default=True)
    priority: str = Field(default="20")
    docroot: str = Field(..., description="Absolute document root")
    aliases: Union[str, List[str]] = Field(default_factory=list)
    options: List[str] = Field(default_factory=lambda: list(DEFAULT_OPTIONS))
    ssl: bool = Field(default=False)
    ssl_redirect: bool = Field(default=False)
    ssl_cert: str = Field(default="", description="Inline certificate content")
    ssl_key: str = Field(default="", description="Inline private key content")
    ssl_ca: Optional[str] = Field(default=None, description="Inline CA content")
    ssl_cert_file: str = Field(default="")
    ssl_key_file: str = Field(default="")
    ssl_ca_file: Optional[str] = None
    ssl_protocol: str = Field(default=DEFAULT_SSL_PROTOCOL)
    ssl_cipher: str = Field(default=DEFAULT_SSL_CIPHER)
    conf_dir: str = Field(..., description="Directory for generated files")
    conf_dir_enable: str = Field(..., description="Directory of enabled vhosts")

    @property
    def port(self) -> int:
        """Listening port, fixed by the TLS flag."""
        return 443 if self.ssl else 80

    @property
    def server_aliases(self) -> List[str]:
        """Aliases as an ordered list."""
        if isinstance(self.aliases, str):
            return [self.aliases] if self.aliases else []
        return list(self.aliases)

    def artifact_path(self, suffix: str) -> str:
        """Path of a TLS file materialised for this vhost."""
        return f"{self.conf_dir.rstrip('/')}/phpmyadmin_{self.vhost_name}{suffix}"
