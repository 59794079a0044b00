from fastapi import APIRouter, Query, status
from typing import Optional
from ..deps import CatalogServiceDep
from ....schemas.catalog_schemas import MeshCatalogItemIn, MeshCatalogItemOut, OrganGroupOut

router = APIRouter(tags=["catalog"])

@router.get("/mesh-catalog", response_model=list[MeshCatalogItemOut])
async def list_meshes(
    svc: CatalogServiceDep,
    search: Optional[str] = Query(None, description="Case-insensitive match on display or mesh name"),
    meshName: Optional[str] = Query(None, description="Exact mesh name"),
):
    return svc.search_meshes(search=search, mesh_name=meshName)

@router.post("/mesh-catalog", status_code=status.HTTP_201_CREATED, response_model=MeshCatalogItemOut)
async def create_mesh(payload: MeshCatalogItemIn, svc: CatalogServiceDep):
    return svc.create_mesh(payload.model_dump())

@router.get("/organ-groups", response_model=list[OrganGroupOut])
async def list_organ_groups(
    svc: CatalogServiceDep,
    search: Optional[str] = Query(None, description="Case-insensitive match on group name"),
):
    return svc.search_groups(search=search)
