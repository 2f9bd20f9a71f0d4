"""Credentials and options for talking to OCI-distribution registries."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Union

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class BasicAuth:
    """Username and password authentication."""

    username: str
    password: str = field(repr=False)


@dataclass(frozen=True)
class BearerToken:
    """Bearer token authentication."""

    token: str = field(repr=False)


Authenticator = Union[BasicAuth, BearerToken]


@dataclass
class RegistryCredentials:
    """What is needed to authenticate against one registry (or any, when no authority is set)."""

    authority: str = ""
    username: str = ""
    password: str = field(default="", repr=False)
    token: str = field(default="", repr=False)

    def authenticator(self) -> Optional[Authenticator]:
        """Return basic auth if possible, else a bearer token, else None."""
        if self.username and self.password:
            log.debug("using basic auth for registry %r", self.authority)
            return BasicAuth(username=self.username, password=self.password)
        if self.token:
            log.debug("using token for registry %r", self.authority)
            return BearerToken(token=self.token)
        return None

    def can_be_used_with_registry(self, registry: str) -> bool:
        """Tell whether these credentials apply to the given registry."""
        if not self.has_authority_specified():
            return True
        return registry == self.authority

    def has_authority_specified(self) -> bool:
        """Tell whether the credentials are restricted to a single registry."""
        return self.authority != ""


@dataclass
class RegistryOptions:
    """Options for fetching images straight from a registry."""

    insecure_skip_tls_verify: bool = False
    insecure_use_http: bool = False
    credentials: List[RegistryCredentials] = field(default_factory=list)
    platform: str = ""

    def authenticator(self, registry: str) -> Optional[Authenticator]:
        """Return the first usable authenticator for the registry, or None."""
        for idx, credentials in enumerate(self.credentials):
            if not credentials.can_be_used_with_registry(registry):
                continue
            auth = credentials.authenticator()
            if auth is None:
                continue
            log.debug("using registry credentials from config index %d", idx)
            return auth
        return None