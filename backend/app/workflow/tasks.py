from ..core.celery_app import celery_app
from ..core.config import settings
from ..services.backup_service import sync_to_database, write_backup
from ..storage.errors import StorageError
from ..storage.store import LOCAL, build_local_store, build_store
import traceback


@celery_app.task(name="backup_data_task")
def backup_data_task(backup_dir: str = None) -> str:
    """Write a gzipped snapshot of the active store"""
    print("[BACKUP_TASK] ▶️ Starting backup")
    try:
        path = write_backup(build_store(settings), backup_dir or settings.BACKUP_DIR)
        print(f"[BACKUP_TASK] ✅ Backup written: {path}")
        return path
    except Exception as e:
        print(f"[BACKUP_TASK] ❌ Backup failed: {e}")
        traceback.print_exc()
        raise


@celery_app.task(name="sync_local_to_database_task", bind=True, max_retries=3)
def sync_local_to_database_task(self):
    """Upsert every record of the local JSON files into the database"""
    print(f"[SYNC_TASK] ▶️ Starting sync (attempt {self.request.retries + 1})")

    if settings.DB_MODE.lower() == LOCAL:
        print("[SYNC_TASK] ⚠️ DB_MODE is local, nothing to sync")
        return {"status": "skipped"}

    try:
        report = sync_to_database(build_local_store(settings.DATA_DIR), build_store(settings))
        print(f"[SYNC_TASK] ✅ Sync finished: {report}")
        return {"status": "completed", "tables": report}

    except StorageError as e:
        # Bad local data will not fix itself on retry
        print(f"[SYNC_TASK] ❌ Local data unusable: {e}")
        raise

    except Exception as e:
        print(f"[SYNC_TASK] ❌ Error: {e}")
        traceback.print_exc()
        if self.request.retries < self.max_retries:
            raise self.retry(exc=e, countdown=10)
        raise
