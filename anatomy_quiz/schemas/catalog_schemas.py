from typing import List, Optional
from pydantic import BaseModel, Field, field_validator

from ..domain.ids import is_valid_id

class MeshCatalogItemIn(BaseModel):
    meshName: str = Field(..., min_length=1)
    displayName: Optional[str] = Field(None, min_length=1)
    organGroupIds: List[str] = []
    defaultStudyYear: Optional[int] = Field(None, ge=1)

    @field_validator("organGroupIds")
    @classmethod
    def validate_group_ids(cls, v: List[str]) -> List[str]:
        bad = [g for g in v if not is_valid_id(g)]
        if bad:
            raise ValueError(f"Malformed organ group ids: {', '.join(bad)}")
        # keep first-seen order, drop repeats
        return list(dict.fromkeys(v))

class MeshCatalogItemOut(BaseModel):
    id: str
    meshName: str
    displayName: str
    organGroupIds: List[str] = []
    defaultStudyYear: Optional[int] = None

class OrganGroupOut(BaseModel):
    id: str
    groupName: str
    description: Optional[str] = None
    defaultStudyYear: Optional[int] = None
