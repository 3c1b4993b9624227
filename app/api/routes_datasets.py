from __future__ import annotations

import logging
import re
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response, status

from app.api.deps import get_settings
from app.core.config import Settings
from app.schemas.datasets import Dataset
from app.services.dataset_repository import DatasetNotFoundError, get_by_id, list_all
from app.services.mongo import DatabaseError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/mlDataset", tags=["datasets"])

_ID_PATTERN = re.compile(r"[0-9]+")
_MAX_ID = 2**63 - 1  # BSON int64

PREFLIGHT_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, PUT, DELETE, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type, X-Requested-With, Authorization",
}


@router.options("")
def dataset_options() -> Response:
    # answered without touching MongoDB
    return Response(
        status_code=status.HTTP_200_OK,
        headers=PREFLIGHT_HEADERS,
        media_type="text/html; charset=utf-8",
    )


@router.get("", response_model=List[Dataset], response_model_exclude_none=True)
def list_datasets(settings: Settings = Depends(get_settings)) -> List[Dataset]:
    try:
        return list_all(settings)
    except DatabaseError as e:
        logger.error("Failed to retrieve datasets: %s", e)
        raise HTTPException(status_code=500, detail="Internal Server Error")


@router.get("/{dataset_id}", response_model=Dataset, response_model_exclude_none=True)
def get_dataset(dataset_id: str, settings: Settings = Depends(get_settings)) -> Dataset:
    if not _ID_PATTERN.fullmatch(dataset_id) or int(dataset_id) > _MAX_ID:
        raise HTTPException(status_code=400, detail="Invalid ID")

    try:
        return get_by_id(settings, int(dataset_id))
    except DatasetNotFoundError:
        raise HTTPException(status_code=404, detail="Not found")
    except DatabaseError as e:
        logger.error("Failed to retrieve dataset %s: %s", dataset_id, e)
        raise HTTPException(status_code=500, detail="Internal Server Error")
