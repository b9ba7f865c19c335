# realty/db/crud_projects.py
from typing import Any, Dict, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from realty.db.models import Project


async def get_project(db: AsyncSession, project_id: int) -> Optional[Project]:
    res = await db.execute(select(Project).where(Project.id == project_id))
    return res.scalars().first()


async def create_project(db: AsyncSession, data: Dict[str, Any]) -> Project:
    project = Project(**data, is_active=True)
    db.add(project)
    await db.commit()
    await db.refresh(project)
    return project


async def update_project(db: AsyncSession, project: Project, data: Dict[str, Any]) -> Project:
    for k, v in data.items():
        setattr(project, k, v)
    db.add(project)
    await db.commit()
    await db.refresh(project)
    return project


async def deactivate_project(db: AsyncSession, project: Project) -> Project:
    project.is_active = False
    db.add(project)
    await db.commit()
    await db.refresh(project)
    return project
