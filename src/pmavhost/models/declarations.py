"""Declarations handed to the apply layer."""

from typing import Any, Dict, List, Literal, Optional
from pydantic import BaseModel, ConfigDict, Field


class InstallRequirement(BaseModel):
    """Base installation every declaration depends on."""
    name: str = Field(default="phpmyadmin")
    package: str = Field(..., description="Distribution package name")
    docroot: str = Field(..., description="Where the package installs its files")

    @property
    def ref(self) -> str:
        return f"install:{self.name}"


class FileArtifact(BaseModel):
    """A file whose content is materialised from inline data."""
    model_config = ConfigDict(frozen=True)

    path: str
    ensure: Literal["present", "absent"] = Field(default="present")
    mode: str = Field(default="0644")
    content: str = Field(default="", repr=False)
    require: List[str] = Field(default_factory=list)

    @property
    def ref(self) -> str:
        return f"file:{self.path}"


class RewriteRule(BaseModel):
    """A rewrite rule guarded by one condition."""
    model_config = ConfigDict(frozen=True)

    comment: str = Field(default="")
    condition: str
    rule: str


class VHostDeclaration(BaseModel):
    """A virtual host handed to the vhost provider."""
    name: str
    server_name: Optional[str] = Field(None, description="Defaults to name")
    ensure: Literal["present", "absent"] = Field(default="present")
    enabled: bool = Field(default=True)
    docroot: str
    priority: str
    port: int
    server_aliases: List[str] = Field(default_factory=list)
    options: List[str] = Field(default_factory=list)
    ssl: bool = Field(default=False)
    custom_fragment: Optional[str] = None
    ssl_cert: Optional[str] = None
    ssl_key: Optional[str] = None
    ssl_ca: Optional[str] = None
    ssl_honor_cipher_order: Optional[str] = None
    ssl_protocol: Optional[str] = None
    ssl_cipher: Optional[str] = None
    rewrites: List[RewriteRule] = Field(default_factory=list)
    conf_dir: str
    conf_dir_enable: str
    require: List[str] = Field(default_factory=list)

    @property
    def ref(self) -> str:
        return f"vhost:{self.name}"

    @property
    def is_redirect(self) -> bool:
        return bool(self.rewrites) and not self.ssl

    @property
    def filename(self) -> str:
        """Config file name, ordered by priority."""
        return f"{self.priority}-{self.name}.conf"

    def as_params(self) -> Dict[str, Any]:
        """Parameters as the vhost provider consumes them.

        A redirect host carries no TLS settings. A TLS host always carries
        ``ssl_cert`` and ``ssl_key`` (possibly ``None``) but only carries
        ``ssl_ca`` when one was resolved.
        """
        params: Dict[str, Any] = {
            "name": self.name,
            "ensure": self.ensure,
            "docroot": self.docroot,
            "priority": self.priority,
            "port": self.port,
            "server_aliases": list(self.server_aliases),
            "options": list(self.options),
        }
        if self.is_redirect:
            params["rewrites"] = [
                {"comment": r.comment, "condition": r.condition, "rule": r.rule}
                for r in self.rewrites
            ]
            return params

        params["ssl"] = self.ssl
        params["custom_fragment"] = self.custom_fragment
        params["ssl_cert"] = self.ssl_cert
        params["ssl_key"] = self.ssl_key
        if self.ssl_ca is not None:
            params["ssl_ca"] = self.ssl_ca
        params["ssl_honor_cipher_order"] = self.ssl_honor_cipher_order
        params["ssl_protocol"] = self.ssl_protocol
        params["ssl_cipher"] = self.ssl_cipher
        return params


class Catalog(BaseModel):
    """Everything declared for one vhost title."""
    title: str
    install: InstallRequirement
    files: List[FileArtifact] = Field(default_factory=list)
    vhosts: List[VHostDeclaration] = Field(default_factory=list)

    @property
    def ensure(self) -> str:
        return self.primary.ensure

    @property
    def primary(self) -> VHostDeclaration:
        """The declaration keyed by the vhost name (always last)."""
        return self.vhosts[-1]

    @property
    def redirect(self) -> Optional[VHostDeclaration]:
        for vhost in self.vhosts[:-1]:
            if vhost.is_redirect:
                return vhost
        return None

    def as_dict(self) -> Dict[str, Any]:
        """Plain mapping for display; inline file content is left out."""
        return {
            "title": self.title,
            "requires": [self.install.ref],
            "files": [
                {"path": f.path, "ensure": f.ensure, "mode": f.mode}
                for f in self.files
            ],
            "vhosts": [v.as_params() for v in self.vhosts],
        }
