# realty/api/routers/upload.py
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, Depends, File, UploadFile

from realty.api.dependencies import UserContext
from realty.core.errors import ValidationFailedError
from realty.services.storage import LocalObjectStore, get_store

router = APIRouter()

MAX_FILES = 10
PROJECT_FIELD_LIMITS = {"images": 10, "gallery": 20, "videos": 5}


def _store_all(store: LocalObjectStore, files: List[UploadFile]) -> List[Dict[str, Any]]:
    stored = []
    try:
        for upload in files:
            stored.append(
                store.put(upload.file, filename=upload.filename, content_type=upload.content_type)
            )
    except ValidationFailedError:
        # all or nothing for one request
        store.delete_urls([s["url"] for s in stored])
        raise
    return stored


def _check_count(files: Optional[List[UploadFile]], limit: int, field: str) -> List[UploadFile]:
    files = [f for f in (files or []) if f.filename]
    if len(files) > limit:
        raise ValidationFailedError(f"Too many files for '{field}' (max {limit})")
    return files


@router.post("/single")
async def upload_single(
    ctx: UserContext,
    file: Optional[UploadFile] = File(None),
    store: LocalObjectStore = Depends(get_store),
):
    if file is None or not file.filename:
        raise ValidationFailedError("No file uploaded")
    stored = _store_all(store, [file])[0]
    return {"message": "File uploaded successfully", "file": stored}


@router.post("/multiple")
async def upload_multiple(
    ctx: UserContext,
    files: Optional[List[UploadFile]] = File(None),
    store: LocalObjectStore = Depends(get_store),
):
    files = _check_count(files, MAX_FILES, "files")
    if not files:
        raise ValidationFailedError("No files uploaded")
    stored = _store_all(store, files)
    return {"message": f"{len(stored)} file(s) uploaded successfully", "files": stored}


@router.post("/property-images")
async def upload_property_images(
    ctx: UserContext,
    images: Optional[List[UploadFile]] = File(None),
    store: LocalObjectStore = Depends(get_store),
):
    images = _check_count(images, MAX_FILES, "images")
    if not images:
        raise ValidationFailedError("No images uploaded")
    stored = _store_all(store, images)
    return {
        "message": f"{len(stored)} image(s) uploaded successfully",
        "images": [s["url"] for s in stored],
    }


@router.post("/project-files")
async def upload_project_files(
    ctx: UserContext,
    images: Optional[List[UploadFile]] = File(None),
    gallery: Optional[List[UploadFile]] = File(None),
    videos: Optional[List[UploadFile]] = File(None),
    store: LocalObjectStore = Depends(get_store),
):
    fields = {
        "images": _check_count(images, PROJECT_FIELD_LIMITS["images"], "images"),
        "gallery": _check_count(gallery, PROJECT_FIELD_LIMITS["gallery"], "gallery"),
        "videos": _check_count(videos, PROJECT_FIELD_LIMITS["videos"], "videos"),
    }
    result: Dict[str, List[str]] = {}
    done: List[str] = []
    try:
        for name, files in fields.items():
            result[name] = [s["url"] for s in _store_all(store, files)]
            done.extend(result[name])
    except ValidationFailedError:
        store.delete_urls(done)
        raise
    return {"message": "Files uploaded successfully", "files": result}


@router.delete("/file")
async def delete_file(
    ctx: UserContext,
    url: Optional[str] = Body(None, embed=True),
    store: LocalObjectStore = Depends(get_store),
):
    if not url:
        raise ValidationFailedError("File URL is required")
    key = store.key_for_url(url)
    if key is None:
        raise ValidationFailedError("Invalid file URL")
    store.delete(key)
    return {"message": "File deleted successfully"}


@router.delete("/files")
async def delete_files(
    ctx: UserContext,
    urls: Optional[List[str]] = Body(None, embed=True),
    store: LocalObjectStore = Depends(get_store),
):
    if not urls:
        raise ValidationFailedError("File URLs array is required")
    deleted = store.delete_urls(urls)
    if not deleted:
        return {"success": True, "message": "No valid files to delete", "deleted": []}
    return {
        "success": True,
        "message": f"{len(deleted)} file(s) deleted successfully",
        "deleted": [{"Key": key} for key in deleted],
    }
