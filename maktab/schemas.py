from typing import Dict, List
from pydantic import BaseModel, Field


class BatchResult(BaseModel):
    """Outcome of a roster-wide operation processed one student at a time."""
    updated: List[str] = Field(default_factory=list)
    failed: Dict[str, str] = Field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.failed
