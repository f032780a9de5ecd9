"""
Website generation pipeline.
============================
Drives analysis, repository creation, optional database provisioning,
code generation, the single commit and optional deployment, reporting a
snapshot of every step after each status change.
"""
from typing import Awaitable, Callable, Dict, List, Optional

from ..exceptions import InvalidInput
from ..interfaces import (
    ICodeGenerator,
    ICommitComposer,
    IDatabaseProvisioner,
    IDeploymentService,
    IProjectAnalyzer,
    IRepositoryHost,
    ProgressCallback,
)
from ..templates import scaffold_files
from .artifacts import ArtifactManager
from .commit import CommitComposer
from .config import Limits, PipelineConfig, Settings, StepIds
from .context import PipelineContext
from .detector import needs_backend
from .logger import PipelineLogger
from .steps import StepTracker, build_step_plan

COMMIT_MESSAGE = "Initial project setup: {description}"


class ProjectPipeline:
    """
    Runs one prompt through the generation steps.

    Every collaborator is injected; database and deployment are optional
    and their steps are only planned when an adapter is present.
    """

    def __init__(
        self,
        analyzer: IProjectAnalyzer,
        code_generator: ICodeGenerator,
        repository_host: IRepositoryHost,
        composer: Optional[ICommitComposer] = None,
        database: Optional[IDatabaseProvisioner] = None,
        deployment: Optional[IDeploymentService] = None,
        config: Optional[PipelineConfig] = None,
        logger: Optional[PipelineLogger] = None,
    ):
        self.analyzer = analyzer
        self.code_generator = code_generator
        self.repository_host = repository_host
        self.composer = composer or CommitComposer(repository_host)
        self.database = database
        self.deployment = deployment
        self.config = config or PipelineConfig()
        self.logger = logger or PipelineLogger(verbose=self.config.verbose)
        self._closeables: List = []

        self._handlers: Dict[str, Callable[[PipelineContext], Awaitable[str]]] = {
            StepIds.ANALYZE: self._analyze,
            StepIds.REPO: self._create_repository,
            StepIds.SETUP: self._setup,
            StepIds.DATABASE: self._provision_database,
            StepIds.STRUCTURE: self._generate_structure,
            StepIds.GENERATE: self._generate_pages,
            StepIds.COMMIT: self._commit,
            StepIds.DEPLOY: self._deploy,
        }

    @classmethod
    def from_settings(cls, settings: Settings, config: Optional[PipelineConfig] = None) -> "ProjectPipeline":
        """Builds the pipeline with the HTTP adapters the settings have tokens for."""
        from ..generators import LLMCodeGenerator, LLMProjectAnalyzer
        from ..llm import CustomLLMProvider
        from ..services import GitHubService, SupabaseService, VercelService

        settings.validate()
        config = config or PipelineConfig(private_repository=settings.private_repository)

        llm = CustomLLMProvider(
            api_key=settings.gemini_api_key,
            base_url=settings.llm_base_url,
            model=settings.llm_model,
        )
        github = GitHubService(settings.github_token, timeout=settings.http_timeout)
        supabase = (
            SupabaseService(settings.supabase_token, region=settings.supabase_region, timeout=settings.http_timeout)
            if settings.database_configured else None
        )
        vercel = (
            VercelService(settings.vercel_token, timeout=settings.http_timeout)
            if settings.deployment_configured else None
        )

        pipeline = cls(
            analyzer=LLMProjectAnalyzer(llm, fallback_on_error=config.fallback_on_error),
            code_generator=LLMCodeGenerator(llm, fallback_on_error=config.fallback_on_error),
            repository_host=github,
            database=supabase,
            deployment=vercel,
            config=config,
        )
        pipeline._closeables = [c for c in (llm, github, supabase, vercel) if c is not None]
        return pipeline

    async def aclose(self):
        """Closes the clients created by from_settings."""
        for client in self._closeables:
            await client.aclose()
        self._closeables = []

    async def run(self, prompt: str, on_update: Optional[ProgressCallback] = None) -> str:
        """
        Executes every planned step in order.

        Args:
            prompt: Free-text website description
            on_update: Receives a tuple snapshot of all steps after each change

        Returns:
            The deployment URL if a deployment ran, otherwise the repository URL

        Raises:
            The first error any step raised, after that step is marked FAILED
        """
        if not prompt or not prompt.strip():
            raise InvalidInput("Prompt is empty")

        ctx = PipelineContext(prompt=prompt, backend_needed=needs_backend(prompt))
        plan = build_step_plan(
            database_configured=self.database is not None,
            deployment_configured=self.deployment is not None,
            backend_needed=ctx.backend_needed,
            include_scaffold=self.config.include_scaffold,
        )
        tracker = StepTracker(plan, on_update)
        self.logger.debug(
            f"Backend needed: {ctx.backend_needed}; plan: {', '.join(s.id for s in plan)}"
        )
        await tracker.publish()

        for position, step in enumerate(plan):
            following = plan[position + 1].id if position + 1 < len(plan) else None
            try:
                await tracker.start(step.id)
                self.logger.phase(step.title)
                details = await self._handlers[step.id](ctx)
                await tracker.complete(step.id, details, start_next=following)
            except Exception as e:
                # A failing progress callback can leave the next step running
                running = tracker.current()
                if running is not None:
                    await tracker.fail(running.id, str(e))
                self.logger.error(f"{running.title if running else step.title} failed: {e}")
                raise
            self.logger.success(details)

        result = ctx.result_url
        self.logger.success(f"Done: {result}")
        return result

    # ------------------------------------------------------------------
    # Step handlers: each returns the completion detail for its step.
    # ------------------------------------------------------------------

    async def _analyze(self, ctx: PipelineContext) -> str:
        ctx.analysis = await self.analyzer.analyze(ctx.prompt)
        self.logger.step(f"{len(ctx.analysis.pages)} pages: {', '.join(p.path for p in ctx.analysis.pages)}")
        return f"Project: {ctx.analysis.project_name}"

    async def _create_repository(self, ctx: PipelineContext) -> str:
        analysis = ctx.require_analysis()
        ctx.repository = await self.repository_host.create_repository(
            analysis.project_name, analysis.description, self.config.private_repository
        )
        return f"Repository: {ctx.repository.full_name}"

    async def _setup(self, ctx: PipelineContext) -> str:
        count = ctx.add_files(scaffold_files(ctx.require_analysis()))
        return f"{count} scaffold files"

    async def _provision_database(self, ctx: PipelineContext) -> str:
        analysis = ctx.require_analysis()
        ctx.database = await self.database.create_project(analysis.project_name)
        await self.database.enable_auth(ctx.database.id)
        return f"Database project: {ctx.database.name}"

    async def _generate_structure(self, ctx: PipelineContext) -> str:
        files = await self.code_generator.generate_structure(ctx.require_analysis(), ctx.database)
        return f"{ctx.add_files(files)} structure files"

    async def _generate_pages(self, ctx: PipelineContext) -> str:
        analysis = ctx.require_analysis()
        for page in analysis.pages:
            self.logger.step(f"Generating page: {page.name} ({page.path})")
            files = await self.code_generator.generate_page(page, analysis, ctx.database)
            ctx.add_files(files)
        if self.config.output_dir:
            self._save_artifacts(ctx)
        return f"{len(ctx.files)} files in total"

    async def _commit(self, ctx: PipelineContext) -> str:
        analysis = ctx.require_analysis()
        ctx.commit = await self.composer.commit_files(
            ctx.require_repository(),
            ctx.files,
            COMMIT_MESSAGE.format(description=analysis.description),
            branch=self.config.branch,
        )
        return f"Commit {ctx.commit.sha[:Limits.SHORT_SHA_LENGTH]} ({ctx.commit.file_count} files)"

    async def _deploy(self, ctx: PipelineContext) -> str:
        repository = ctx.require_repository()
        ctx.deployment_project = await self.deployment.import_repository(
            repository.web_url, ctx.require_analysis().project_name
        )
        ctx.deployment = await self.deployment.trigger_deployment(ctx.deployment_project, ref=ctx.commit.branch)
        return f"Deployment: {ctx.deployment.url}"

    def _save_artifacts(self, ctx: PipelineContext):
        artifacts = ArtifactManager(self.config.output_dir)
        self.logger.save(artifacts.save_analysis(ctx.require_analysis()))
        written = artifacts.save_files(ctx.files)
        self.logger.save(f"{len(written)} files under {artifacts.files_dir}")


async def run_pipeline(
    prompt: str,
    on_update: Optional[ProgressCallback] = None,
    settings: Optional[Settings] = None,
    config: Optional[PipelineConfig] = None,
) -> str:
    """
    Runs the whole pipeline with adapters built from settings (the
    environment by default) and closes every HTTP client afterwards.
    """
    pipeline = ProjectPipeline.from_settings(settings or Settings.from_env(), config)
    try:
        return await pipeline.run(prompt, on_update)
    finally:
        await pipeline.aclose()
