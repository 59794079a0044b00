from typing import List, Optional
from .rows import group_row_to_dict, mesh_row_to_dict
from ..domain.mesh_names import format_mesh_name_to_display_name
from ..repositories.catalog_repository import CatalogRepository

class CatalogService:
    def __init__(self, repo: CatalogRepository, search_limit: int) -> None:
        self.repo = repo
        self.search_limit = search_limit

    def search_meshes(self, search: Optional[str] = None, mesh_name: Optional[str] = None) -> List[dict]:
        rows = self.repo.search_meshes(
            search=search.strip() if search else None,
            mesh_name=mesh_name.strip() if mesh_name else None,
            limit=self.search_limit,
        )
        return [mesh_row_to_dict(r) for r in rows]

    def create_mesh(self, payload: dict) -> dict:
        mesh_name = payload["meshName"].strip()
        row = self.repo.create_mesh(
            {
                "mesh_name": mesh_name,
                "display_name": payload.get("displayName") or format_mesh_name_to_display_name(mesh_name),
                "organ_group_ids": payload.get("organGroupIds") or [],
                "default_study_year": payload.get("defaultStudyYear"),
            }
        )
        return mesh_row_to_dict(row)

    def search_groups(self, search: Optional[str] = None) -> List[dict]:
        rows = self.repo.search_groups(search=search.strip() if search else None, limit=self.search_limit)
        return [group_row_to_dict(r) for r in rows]
