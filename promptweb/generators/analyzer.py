"""
LLMProjectAnalyzer - analysis step

Turns a free-text website description into a ProjectAnalysis using
PROMPT_PROJECT_ANALYSIS.
"""
import logging

from ..domain import ProjectAnalysis
from ..exceptions import ServiceError
from ..interfaces import ILLMProvider, IProjectAnalyzer
from ..prompts.library import PROMPT_PROJECT_ANALYSIS, SYSTEM_PROMPT_ENGINEER
from ..templates import default_analysis

logger = logging.getLogger("generators.analyzer")

ANALYSIS_TEMPERATURE = 0.3


class LLMProjectAnalyzer(IProjectAnalyzer):
    """Analyzes prompts with an LLM."""

    def __init__(self, llm: ILLMProvider, fallback_on_error: bool = False):
        self.llm = llm
        self.fallback_on_error = fallback_on_error

    async def analyze(self, prompt: str) -> ProjectAnalysis:
        """
        Raises:
            ServiceError: if the model fails or returns an unusable plan and
                fallback_on_error is off
        """
        try:
            data = await self.llm.prompt_json(
                PROMPT_PROJECT_ANALYSIS.format(user_prompt=prompt.replace('"', "'")),
                SYSTEM_PROMPT_ENGINEER,
                temperature=ANALYSIS_TEMPERATURE,
            )
            return self._parse_response(data)
        except ServiceError as e:
            if not self.fallback_on_error:
                raise
            logger.warning(f"Analysis failed, using default analysis: {e}")
            return default_analysis(prompt)

    def _parse_response(self, data: dict) -> ProjectAnalysis:
        analysis = ProjectAnalysis.from_dict(data)
        if not analysis.pages:
            raise ServiceError("gemini", "Analysis contained no pages")
        logger.info(f"Analyzed project '{analysis.project_name}' with {len(analysis.pages)} pages")
        return analysis
