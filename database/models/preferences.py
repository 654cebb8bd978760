from typing import List

from pydantic import BaseModel, ConfigDict, Field


class JobPreferences(BaseModel):
    """Shape of SeekerProfile.job_preferences."""
    model_config = ConfigDict(extra='ignore')

    preferred_locations: List[str] = Field(default_factory=list)
    preferred_job_types: List[str] = Field(default_factory=list)
