# backend/app/api/v1/backup.py
from fastapi import APIRouter, Depends, HTTPException
import logging

from ...core.config import settings
from ...services.backup_service import collect_backup
from ...storage.store import LOCAL, DataStore
from ...workflow.tasks import backup_data_task, sync_local_to_database_task
from ..deps import get_current_admin, get_store

router = APIRouter(dependencies=[Depends(get_current_admin)])


@router.get("/")
def download_backup(store: DataStore = Depends(get_store)):
    """Full catalog snapshot (admin accounts excluded)"""
    return collect_backup(store)


@router.post("/")
def queue_backup():
    """Write a compressed backup file in the background"""
    task = backup_data_task.delay()
    logging.info(f"Backup task queued: {task.id}")
    return {"message": "Backup task has been queued", "task_id": task.id, "backup_dir": settings.BACKUP_DIR}


@router.post("/sync")
def queue_sync(store: DataStore = Depends(get_store)):
    """Copy the local JSON files into the database in the background"""
    if store.mode == LOCAL:
        raise HTTPException(status_code=400, detail="Sync needs DB_MODE=postgres; the local files are already the active store")
    task = sync_local_to_database_task.delay()
    return {"message": "Sync task has been queued", "task_id": task.id}
