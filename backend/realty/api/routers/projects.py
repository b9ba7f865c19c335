# realty/api/routers/projects.py
from dataclasses import replace
from typing import Optional

from fastapi import APIRouter

from realty.api.dependencies import AdminContext, DbSession
from realty.core.errors import NotFoundError
from realty.db import crud_projects
from realty.schemas.project import ProjectCreate, ProjectUpdate
from realty.services.listing_query import PROJECT, ListingFilters, PageRequest, list_listings

router = APIRouter()


@router.get("")
async def list_projects(
    db: DbSession,
    city: Optional[str] = None,
    state: Optional[str] = None,
    status: Optional[str] = None,
    min_price: Optional[str] = None,
    max_price: Optional[str] = None,
    search: Optional[str] = None,
    page: Optional[str] = None,
    limit: Optional[str] = None,
):
    """
    Active projects. ``status`` here is the construction stage
    (upcoming / ongoing / completed), not a moderation state.
    """
    filters = ListingFilters.from_params(
        city=city,
        state=state,
        category=status,
        min_price=min_price,
        max_price=max_price,
        search=search,
    )
    filters = replace(filters, is_active=True)
    result = await list_listings(db, PROJECT, filters, PageRequest.from_params(page, limit))
    return result.to_dict("projects")


@router.get("/{project_id}")
async def get_project(project_id: int, db: DbSession):
    project = await crud_projects.get_project(db, project_id)
    if project is None:
        raise NotFoundError("Project not found")
    return {"project": PROJECT.formatter(project)}


@router.post("", status_code=201)
async def create_project(payload: ProjectCreate, db: DbSession, ctx: AdminContext):
    project = await crud_projects.create_project(db, payload.to_row())
    return {"message": "Project created successfully", "project": PROJECT.formatter(project)}


@router.put("/{project_id}")
async def update_project(project_id: int, payload: ProjectUpdate, db: DbSession, ctx: AdminContext):
    project = await crud_projects.get_project(db, project_id)
    if project is None:
        raise NotFoundError("Project not found")
    project = await crud_projects.update_project(db, project, payload.to_row())
    return {"message": "Project updated successfully", "project": PROJECT.formatter(project)}


@router.delete("/{project_id}")
async def delete_project(project_id: int, db: DbSession, ctx: AdminContext):
    project = await crud_projects.get_project(db, project_id)
    if project is None:
        raise NotFoundError("Project not found")
    await crud_projects.deactivate_project(db, project)
    return {"message": "Project deleted successfully"}
