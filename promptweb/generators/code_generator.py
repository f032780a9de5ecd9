"""
LLMCodeGenerator - structure and generate steps

Generates project-wide files with PROMPT_PROJECT_STRUCTURE and per-page
files with PROMPT_PAGE_GENERATION.
"""
import logging
from typing import List, Optional

from ..domain import DatabaseProject, GeneratedFile, PageStructure, ProjectAnalysis
from ..exceptions import ServiceError
from ..interfaces import ICodeGenerator, ILLMProvider
from ..prompts.library import (
    DATABASE_FILES_STRUCTURE,
    DATABASE_INFO,
    DATABASE_RULE_PAGE,
    PROMPT_PAGE_GENERATION,
    PROMPT_PROJECT_STRUCTURE,
    SYSTEM_PROMPT_ENGINEER,
)
from ..templates import default_page_files, default_page_path, default_project_structure

logger = logging.getLogger("generators.code")

PAGE_TEMPERATURE = 0.4
STRUCTURE_TEMPERATURE = 0.2


def _database_info(database: Optional[DatabaseProject]) -> str:
    if database is None:
        return ""
    return DATABASE_INFO.format(connection_url=database.connection_url, public_key=database.public_key)


def parse_files(data) -> List[GeneratedFile]:
    """
    Reads {"files": [{filePath, content, description}]} (or a bare list).

    Raises:
        ServiceError: if the list is missing, empty or holds malformed entries
    """
    items = data.get("files") if isinstance(data, dict) else data
    if not isinstance(items, list) or not items:
        raise ServiceError("gemini", "Response did not contain a file list")

    files = []
    for item in items:
        if not isinstance(item, dict) or not isinstance(item.get("content"), str):
            raise ServiceError("gemini", f"Malformed file entry: {str(item)[:80]}")
        generated = GeneratedFile.from_dict(item)
        if not generated.file_path or ".." in generated.file_path.split("/"):
            raise ServiceError("gemini", f"Invalid file path: {generated.file_path!r}")
        files.append(generated)
    return files


class LLMCodeGenerator(ICodeGenerator):
    """Generates Next.js project files using an LLM."""

    def __init__(self, llm: ILLMProvider, fallback_on_error: bool = False):
        self.llm = llm
        self.fallback_on_error = fallback_on_error

    async def generate_structure(
        self, analysis: ProjectAnalysis, database: Optional[DatabaseProject] = None
    ) -> List[GeneratedFile]:
        prompt = PROMPT_PROJECT_STRUCTURE.format(
            project_name=analysis.project_name,
            description=analysis.description,
            tech_stack=", ".join(analysis.tech_stack),
            database_info=_database_info(database),
            database_dependency=", @supabase/supabase-js" if database else "",
            database_files=DATABASE_FILES_STRUCTURE if database else "",
        )
        try:
            data = await self.llm.prompt_json(prompt, SYSTEM_PROMPT_ENGINEER, temperature=STRUCTURE_TEMPERATURE)
            files = parse_files(data)
        except ServiceError as e:
            if not self.fallback_on_error:
                raise
            logger.warning(f"Structure generation failed, using default structure: {e}")
            return default_project_structure(analysis, database)

        logger.info(f"Generated {len(files)} structure files")
        return files

    async def generate_page(
        self,
        page: PageStructure,
        analysis: ProjectAnalysis,
        database: Optional[DatabaseProject] = None,
    ) -> List[GeneratedFile]:
        prompt = PROMPT_PAGE_GENERATION.format(
            project_name=analysis.project_name,
            description=analysis.description,
            project_features=", ".join(analysis.features),
            database_info=_database_info(database),
            page_name=page.name,
            page_path=page.path,
            page_description=page.description,
            page_features=", ".join(page.features),
            page_components=", ".join(c.name for c in page.components),
            page_file=default_page_path(page),
            database_rule=DATABASE_RULE_PAGE if database else "",
        )
        try:
            data = await self.llm.prompt_json(prompt, SYSTEM_PROMPT_ENGINEER, temperature=PAGE_TEMPERATURE)
            files = parse_files(data)
        except ServiceError as e:
            if not self.fallback_on_error:
                raise
            logger.warning(f"Page '{page.name}' generation failed, using default page: {e}")
            return default_page_files(page, database)

        logger.info(f"Generated {len(files)} files for page '{page.name}'")
        return files
