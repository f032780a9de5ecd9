from .analyzer import LLMProjectAnalyzer
from .code_generator import LLMCodeGenerator

__all__ = [
    'LLMProjectAnalyzer',
    'LLMCodeGenerator',
]
