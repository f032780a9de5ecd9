"""
Supabase Management API adapter.
================================
Provisions the database project a backend-backed site talks to.
"""
import logging
import secrets
from typing import Any, Dict, List, Optional

from ..domain import DatabaseProject
from ..exceptions import ServiceError
from ..interfaces import IDatabaseProvisioner
from .http import ServiceClient

logger = logging.getLogger("services.supabase")

DEFAULT_REGION = "ap-southeast-1"
DEFAULT_SITE_URL = "http://localhost:3000"


class SupabaseService(ServiceClient, IDatabaseProvisioner):
    platform = "Supabase"
    base_url = "https://api.supabase.com"

    def __init__(self, token: str, region: str = DEFAULT_REGION, **kwargs):
        super().__init__(token, **kwargs)
        self.region = region

    async def create_project(self, name: str, region: Optional[str] = None) -> DatabaseProject:
        """Creates a free-plan project and returns it with its API keys."""
        logger.info(f"Creating Supabase project: {name}")
        project = await self._request(
            "POST",
            "/v1/projects",
            json_data={
                "name": name,
                "organization_id": await self.get_default_org_id(),
                "plan": "free",
                "region": region or self.region,
                "db_pass": secrets.token_urlsafe(24),
            },
        )
        ref = project.get("id") or project.get("ref")
        if not ref:
            raise ServiceError(self.platform, "Project response did not include an id")

        keys = await self.get_api_keys(ref)
        return DatabaseProject(
            id=ref,
            name=project.get("name", name),
            connection_url=f"https://{ref}.supabase.co",
            public_key=keys.get("anon", ""),
            private_key=keys.get("service_role", ""),
        )

    async def enable_auth(self, project_id: str, site_url: str = DEFAULT_SITE_URL) -> None:
        """Turns on email signup for the project without confirmation mails."""
        logger.info(f"Enabling Supabase Auth for project: {project_id}")
        await self._request(
            "PATCH",
            f"/v1/projects/{project_id}/config/auth",
            json_data={
                "site_url": site_url,
                "disable_signup": False,
                "mailer_autoconfirm": True,
            },
        )

    async def create_table(self, project_id: str, table: str, columns: List[Dict[str, Any]]) -> None:
        """
        Creates a table through the SQL endpoint.

        Args:
            project_id: Project ref
            table: Table name
            columns: [{"name": "id", "type": "uuid", "primary_key": True, "nullable": False}, ...]
        """
        definitions = []
        for col in columns:
            definition = f'"{col["name"]}" {col["type"]}'
            if col.get("primary_key"):
                definition += " primary key"
            elif not col.get("nullable", True):
                definition += " not null"
            definitions.append(definition)
        query = f'create table if not exists "{table}" ({", ".join(definitions)});'
        logger.info(f"Creating Supabase table: {table}")
        await self._request("POST", f"/v1/projects/{project_id}/database/query", json_data={"query": query})

    async def get_default_org_id(self) -> str:
        orgs = await self._request("GET", "/v1/organizations")
        if not orgs:
            raise ServiceError(self.platform, "No organization available for this token")
        return orgs[0]["id"]

    async def get_api_keys(self, project_id: str) -> Dict[str, str]:
        keys = await self._request("GET", f"/v1/projects/{project_id}/api-keys")
        return {k.get("name"): k.get("api_key", "") for k in keys or [] if isinstance(k, dict)}
