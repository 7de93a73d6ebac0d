from pydantic import BaseModel, Field
from typing import List

from .broll import ShotPrompt


class Project(BaseModel):
    """A user-owned VSL script and the b-roll generated for it."""
    id: str
    user_id: str
    title: str = Field(..., min_length=1)
    vsl_content: str
    created_at: float
    broll_prompts: List[ShotPrompt] = Field(default_factory=list)

    def to_wire(self) -> dict:
        data = self.model_dump(exclude={"broll_prompts"})
        data["broll_prompts"] = [p.model_dump(by_alias=True) for p in self.broll_prompts]
        return data
