"""Shapes of the payloads returned by the Alacran API.

These are ``TypedDict``s: the client returns the decoded JSON unchanged and
the types only document which keys callers can expect.
"""

from typing import Any, NotRequired, TypedDict


class AppDefinitionsResponse(TypedDict):
    appDefinitions: list[dict[str, Any]]
    rootDomain: str
    alacranSubDomain: str
    defaultNginxConfig: str


class RegistryInfo(TypedDict):
    id: str
    registryUser: str
    registryPassword: str
    registryDomain: str
    registryImagePrefix: str
    registryType: str


class RegistriesResponse(TypedDict):
    registries: list[RegistryInfo]
    defaultRegistryId: NotRequired[str]


class NodesResponse(TypedDict):
    nodes: list[dict[str, Any]]


class BackupResponse(TypedDict):
    downloadToken: str


class LoginResponse(TypedDict):
    token: str
