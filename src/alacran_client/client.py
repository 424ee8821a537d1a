"""High-level client mapping Alacran API operations onto the transport."""

import json
from typing import Any

import httpx

from alacran_client.auth.credentials import CredentialResolver
from alacran_client.auth.provider import (
    AuthenticationContent,
    AuthenticationProvider,
    EnvAuthenticationProvider,
)
from alacran_client.config import DEFAULT_CONFIG, TransportConfig
from alacran_client.models import (
    AppDefinitionsResponse,
    BackupResponse,
    NodesResponse,
    RegistriesResponse,
    RegistryInfo,
)
from alacran_client.transport.http import HttpTransport
from alacran_client.transport.reauth import Reauthenticator

# Keys of an app definition accepted by /user/apps/appDefinitions/update
APP_DEFINITION_UPDATE_KEYS = (
    "instanceCount",
    "alacranDefinitionRelativeFilePath",
    "notExposeAsWebApp",
    "forceSsl",
    "websocketSupport",
    "volumes",
    "ports",
    "customNginxConfig",
    "appPushWebhook",
    "nodeId",
    "preDeployFunction",
    "serviceUpdateOverride",
    "containerHttpPort",
    "description",
    "httpAuth",
    "envVars",
    "appDeployTokenConfig",
    "tags",
    "redirectDomain",
    "projectId",
)


def _detached(endpoint: str, detached: bool) -> str:
    return f"{endpoint}?detached=1" if detached else endpoint


class AlacranClient:
    """Async client for an Alacran server.

    Every operation is a thin mapping onto ``HttpTransport.fetch``; the
    transport adds auth headers, logs in again when the token expires and
    turns error envelopes into exceptions.

    Args:
        base_domain: Server address, e.g. ``https://alacran.example.com``
        auth_provider: Supplies tokens and login credentials
        config: Transport settings
        http_client: Optional shared ``httpx.AsyncClient``
        single_flight_reauth: Share one login among concurrent requests that
            all hit an expired token

    Example:
        ```python
        provider = SimpleAuthenticationProvider(lambda: AuthenticationContent(password="alacran42"))
        async with AlacranClient("https://alacran.example.com", provider) as client:
            nodes = await client.get_all_nodes()
        ```
    """

    def __init__(
        self,
        base_domain: str,
        auth_provider: AuthenticationProvider,
        *,
        config: TransportConfig = DEFAULT_CONFIG,
        http_client: httpx.AsyncClient | None = None,
        single_flight_reauth: bool = False,
    ) -> None:
        if not base_domain:
            raise ValueError("base_domain must be provided.")

        self.auth_provider = auth_provider
        self.reauthenticator = Reauthenticator(auth_provider, single_flight=single_flight_reauth)
        self.http = HttpTransport(
            base_domain.rstrip("/") + config.api_prefix,
            auth_provider,
            reauthenticator=self.reauthenticator,
            config=config,
            http_client=http_client,
        )

    @classmethod
    def from_env(cls, resolver: CredentialResolver | None = None, **kwargs: Any) -> "AlacranClient":
        """Build a client from ``ALACRAN_URL`` and ``ALACRAN_PASSWORD`` (or ``.env``)."""
        resolver = resolver or CredentialResolver()
        base_domain = resolver.resolve("URL", required=True)
        return cls(base_domain, EnvAuthenticationProvider(resolver), **kwargs)

    async def __aenter__(self) -> "AlacranClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()

    def destroy(self) -> None:
        self.http.destroy()

    async def aclose(self) -> None:
        await self.http.aclose()

    async def _get(self, endpoint: str, params: dict[str, Any] | None = None) -> Any:
        return await self.http.fetch(HttpTransport.GET, endpoint, params or {})

    async def _post(self, endpoint: str, body: Any = None) -> Any:
        return await self.http.fetch(HttpTransport.POST, endpoint, body if body is not None else {})

    # Authentication

    async def login(self, password: str, otp_token: str | None = None) -> str:
        """Log in and store the new token in the auth provider.

        Returns:
            The issued token
        """
        content = AuthenticationContent(password=password, otp_token=otp_token)
        return await self.reauthenticator.login(self.http, content)

    async def change_pass(self, old_password: str, new_password: str) -> None:
        await self._post("/user/changepassword", {"oldPassword": old_password, "newPassword": new_password})

    # Themes

    async def get_all_themes(self) -> dict[str, Any]:
        return await self._get("/user/system/themes/all")

    async def get_current_theme(self) -> dict[str, Any]:
        return await self._get("/theme/current")

    async def set_current_theme(self, theme_name: str) -> dict[str, Any]:
        return await self._post("/user/system/themes/setcurrent", {"themeName": theme_name})

    async def save_theme(self, old_name: str, theme: dict[str, Any]) -> dict[str, Any]:
        return await self._post(
            "/user/system/themes/update",
            {"oldName": old_name, "name": theme.get("name"), "content": theme.get("content")},
        )

    async def delete_theme(self, theme_name: str) -> dict[str, Any]:
        return await self._post("/user/system/themes/delete", {"themeName": theme_name})

    # System

    async def get_alacran_info(self) -> dict[str, Any]:
        return await self._get("/user/system/info")

    async def update_root_domain(self, root_domain: str, force: bool) -> None:
        await self._post("/user/system/changerootdomain", {"rootDomain": root_domain, "force": force})

    async def enable_root_ssl(self, email_address: str) -> None:
        await self._post("/user/system/enablessl", {"emailAddress": email_address})

    async def force_ssl(self, is_enabled: bool) -> None:
        await self._post("/user/system/forcessl", {"isEnabled": is_enabled})

    async def get_load_balancer_info(self) -> dict[str, Any]:
        return await self._get("/user/system/loadbalancerinfo")

    async def get_net_data_info(self) -> dict[str, Any]:
        return await self._get("/user/system/netdata")

    async def update_net_data_info(self, net_data_info: dict[str, Any]) -> None:
        await self._post("/user/system/netdata", {"netDataInfo": net_data_info})

    async def get_go_access_info(self) -> dict[str, Any]:
        return await self._get("/user/system/goaccess")

    async def update_go_access_info(self, go_access_info: dict[str, Any]) -> None:
        await self._post("/user/system/goaccess", {"goAccessInfo": go_access_info})

    async def get_go_access_reports(self, app_name: str) -> list[dict[str, Any]]:
        return await self._get(f"/user/system/goaccess/{app_name}/files")

    async def get_go_access_report(self, report_url: str) -> str:
        return await self._get(report_url)

    async def create_backup(self) -> BackupResponse:
        return await self._post("/user/system/createbackup", {"postDownloadFileName": "backup.tar"})

    async def get_nginx_config(self) -> dict[str, Any]:
        return await self._get("/user/system/nginxconfig")

    async def set_nginx_config(self, custom_base: str, custom_alacran: str) -> None:
        await self._post(
            "/user/system/nginxconfig",
            {
                "baseConfig": {"customValue": custom_base},
                "alacranConfig": {"customValue": custom_alacran},
            },
        )

    async def get_disk_clean_up_settings(self) -> dict[str, Any]:
        return await self._get("/user/system/diskcleanup")

    async def set_disk_clean_up_settings(self, most_recent_limit: int, cron_schedule: str, timezone: str) -> None:
        await self._post(
            "/user/system/diskcleanup",
            {"mostRecentLimit": most_recent_limit, "cronSchedule": cron_schedule, "timezone": timezone},
        )

    # Apps

    async def get_all_apps(self) -> AppDefinitionsResponse:
        return await self._get("/user/apps/appDefinitions")

    async def fetch_build_logs(self, app_name: str) -> dict[str, Any]:
        return await self._get(f"/user/apps/appData/{app_name}")

    async def fetch_app_logs_in_hex(self, app_name: str) -> dict[str, Any]:
        return await self._get(f"/user/apps/appData/{app_name}/logs?encoding=hex")

    async def upload_app_data(self, app_name: str, file: Any) -> None:
        """Upload a source tarball.

        Args:
            app_name: App to deploy
            file: ``bytes``, a binary file object, or a
                ``(filename, content[, content_type])`` tuple
        """
        await self._post(f"/user/apps/appData/{app_name}?detached=1", {"sourceFile": file})

    async def upload_alacran_definition_content(
        self,
        app_name: str,
        alacran_definition: dict[str, Any],
        git_hash: str,
        detached: bool,
    ) -> None:
        await self._post(
            _detached(f"/user/apps/appData/{app_name}", detached),
            {"alacranDefinitionContent": json.dumps(alacran_definition), "gitHash": git_hash},
        )

    async def update_config_and_save(self, app_name: str, app_definition: dict[str, Any]) -> None:
        body = {"appName": app_name}
        body.update({key: app_definition.get(key) for key in APP_DEFINITION_UPDATE_KEYS})
        await self._post("/user/apps/appDefinitions/update", body)

    async def rename_app(self, old_app_name: str, new_app_name: str) -> None:
        await self._post("/user/apps/appDefinitions/rename", {"oldAppName": old_app_name, "newAppName": new_app_name})

    async def register_new_app(self, app_name: str, project_id: str, has_persistent_data: bool, detached: bool) -> None:
        await self._post(
            _detached("/user/apps/appDefinitions/register", detached),
            {"appName": app_name, "projectId": project_id, "hasPersistentData": has_persistent_data},
        )

    async def delete_app(
        self,
        app_name: str | None,
        volumes: list[str],
        app_names: list[str] | None = None,
    ) -> dict[str, Any]:
        return await self._post(
            "/user/apps/appDefinitions/delete",
            {"appName": app_name, "volumes": volumes, "appNames": app_names},
        )

    async def enable_ssl_for_base_domain(self, app_name: str) -> None:
        await self._post("/user/apps/appDefinitions/enablebasedomainssl", {"appName": app_name})

    async def attach_new_custom_domain_to_app(self, app_name: str, custom_domain: str) -> None:
        await self._post("/user/apps/appDefinitions/customdomain", {"appName": app_name, "customDomain": custom_domain})

    async def enable_ssl_for_custom_domain(self, app_name: str, custom_domain: str) -> None:
        await self._post(
            "/user/apps/appDefinitions/enablecustomdomainssl", {"appName": app_name, "customDomain": custom_domain}
        )

    async def remove_custom_domain(self, app_name: str, custom_domain: str) -> None:
        await self._post(
            "/user/apps/appDefinitions/removecustomdomain", {"appName": app_name, "customDomain": custom_domain}
        )

    async def get_unused_images(self, most_recent_limit: int) -> dict[str, Any]:
        return await self._get("/user/apps/appDefinitions/unusedImages", {"mostRecentLimit": str(most_recent_limit)})

    async def delete_images(self, image_ids: list[str]) -> None:
        await self._post("/user/apps/appDefinitions/deleteImages", {"imageIds": image_ids})

    async def force_build(self, webhook_path: str) -> None:
        await self._post(webhook_path)

    # Projects

    async def get_all_projects(self) -> dict[str, Any]:
        return await self._get("/user/projects")

    async def register_project(self, project: dict[str, Any]) -> dict[str, Any]:
        return await self._post("/user/projects/register", dict(project))

    async def update_project(self, project: dict[str, Any]) -> None:
        await self._post("/user/projects/update", {"projectDefinition": project})

    async def delete_projects(self, project_ids: list[str]) -> None:
        await self._post("/user/projects/delete", {"projectIds": project_ids})

    # Registries

    async def get_docker_registries(self) -> RegistriesResponse:
        return await self._get("/user/registries")

    async def enable_self_hosted_docker_registry(self) -> None:
        await self._post("/user/system/selfhostregistry/enableregistry")

    async def disable_self_hosted_docker_registry(self) -> None:
        await self._post("/user/system/selfhostregistry/disableregistry")

    async def add_docker_registry(self, registry: RegistryInfo) -> None:
        await self._post("/user/registries/insert", dict(registry))

    async def update_docker_registry(self, registry: RegistryInfo) -> None:
        await self._post("/user/registries/update", dict(registry))

    async def delete_docker_registry(self, registry_id: str) -> None:
        await self._post("/user/registries/delete", {"registryId": registry_id})

    async def set_default_push_docker_registry(self, registry_id: str) -> None:
        await self._post("/user/registries/setpush", {"registryId": registry_id})

    # Nodes

    async def get_all_nodes(self) -> NodesResponse:
        return await self._get("/user/system/nodes")

    async def add_docker_node(
        self,
        node_type: str,
        private_key: str,
        remote_node_ip_address: str,
        ssh_port: str,
        ssh_user: str,
        alacran_ip_address: str,
    ) -> None:
        await self._post(
            "/user/system/nodes",
            {
                "nodeType": node_type,
                "privateKey": private_key,
                "remoteNodeIpAddress": remote_node_ip_address,
                "sshPort": ssh_port,
                "sshUser": ssh_user,
                "alacranIpAddress": alacran_ip_address,
            },
        )

    async def execute_generic_api_command(self, verb: str, endpoint: str, data: Any = None) -> Any:
        """Call an endpoint that has no dedicated method."""
        return await self.http.fetch(verb, endpoint, data if data is not None else {})
