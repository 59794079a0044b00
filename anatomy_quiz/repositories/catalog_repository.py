from typing import Iterable, List, Optional
from supabase import Client


def _ilike_term(search: str) -> str:
    # PostgREST or-filters use , and () as syntax
    cleaned = "".join(ch for ch in search if ch not in ",()")
    return f"%{cleaned}%"


class CatalogRepository:
    """Mesh catalog items and organ groups."""

    def __init__(self, client: Client) -> None:
        self.client = client

    def search_meshes(self, search: Optional[str], mesh_name: Optional[str], limit: int) -> List[dict]:
        query = self.client.table("mesh_catalog").select("*")
        if search:
            term = _ilike_term(search)
            query = query.or_(f"display_name.ilike.{term},mesh_name.ilike.{term}")
        if mesh_name:
            # exact match, the 3D client resolves its mesh ids this way
            query = query.eq("mesh_name", mesh_name)
        res = query.limit(limit).execute()
        return res.data or []

    def create_mesh(self, row: dict) -> dict:
        res = self.client.table("mesh_catalog").insert(row).execute()
        if not res.data or not isinstance(res.data, list) or "id" not in res.data[0]:
            raise RuntimeError("Insert mesh_catalog failed: no returned id")
        return res.data[0]

    def search_groups(self, search: Optional[str], limit: int) -> List[dict]:
        query = self.client.table("organ_groups").select("*")
        if search:
            query = query.ilike("group_name", _ilike_term(search))
        res = query.limit(limit).execute()
        return res.data or []

    def get_meshes_by_ids(self, ids: Iterable[str]) -> List[dict]:
        ids = list(ids)
        if not ids:
            return []
        res = self.client.table("mesh_catalog").select("*").in_("id", ids).execute()
        return res.data or []

    def get_groups_by_ids(self, ids: Iterable[str]) -> List[dict]:
        ids = list(ids)
        if not ids:
            return []
        res = self.client.table("organ_groups").select("*").in_("id", ids).execute()
        return res.data or []
