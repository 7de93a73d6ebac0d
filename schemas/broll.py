from pydantic import BaseModel, ConfigDict, Field
from typing import List


class ShotPrompt(BaseModel):
    """One b-roll suggestion tied to the script line that inspired it."""
    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    prompt: str = Field(..., min_length=1, description="Short cinematic shot description")
    script_reference: str = Field(
        ..., min_length=1, alias="scriptReference",
        description="The exact line of the script the shot corresponds to",
    )


class GenerationResult(BaseModel):
    """A validated batch, in the order the model numbered it."""
    prompts: List[ShotPrompt]
    attempts: int = Field(default=1, ge=1, description="Attempts spent to produce this batch")

    @property
    def count(self) -> int:
        return len(self.prompts)

    def wire_prompts(self) -> list[dict]:
        return [p.model_dump(by_alias=True) for p in self.prompts]
