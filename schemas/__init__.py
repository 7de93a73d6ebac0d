from .broll import ShotPrompt, GenerationResult
from .project import Project

__all__ = [
    "ShotPrompt", "GenerationResult",
    "Project",
]
