from .config import Config
from .generator import GenerationFailure, GenerationSuccess, generate_broll_prompts
from .projects import ProjectStore

__all__ = ["Config", "GenerationFailure", "GenerationSuccess", "generate_broll_prompts", "ProjectStore"]
