import gzip
import json
import logging
import os
from datetime import datetime, timezone
from typing import Dict, Optional

from ..storage.store import DataStore

logger = logging.getLogger(__name__)

BACKUP_VERSION = "1.0"

# Parents before children so foreign keys resolve during a sync
BACKUP_TABLES = ("brands", "vehicles", "trims", "colors", "options", "faqs", "banners", "partners")


def collect_backup(store: DataStore) -> Dict:
    """Snapshot of every catalog table. Admin accounts are never exported."""
    data = {name: store.tables[name].find_many() for name in BACKUP_TABLES}
    data["settings"] = store.settings.as_dict()
    data["company_info"] = store.company_info.as_dict()

    return {
        "version": BACKUP_VERSION,
        "exported_at": datetime.now(timezone.utc).isoformat(),
        "source": store.mode,
        "data": data,
        "summary": {name: len(data[name]) for name in BACKUP_TABLES},
    }


def write_backup(store: DataStore, backup_dir: str) -> str:
    backup = collect_backup(store)
    os.makedirs(backup_dir, exist_ok=True)
    filename = f"backup-{datetime.now().strftime('%Y%m%d-%H%M%S')}.json.gz"
    path = os.path.join(backup_dir, filename)

    with gzip.open(path, "wt", encoding="utf-8") as f:
        json.dump(backup, f, ensure_ascii=False, default=str)

    logger.info(f"Backup written to {path}: {backup['summary']}")
    return path


def read_backup(path: str) -> Dict:
    with gzip.open(path, "rt", encoding="utf-8") as f:
        return json.load(f)


def sync_to_database(source: DataStore, target: DataStore, tables=BACKUP_TABLES) -> Dict[str, Dict[str, int]]:
    """
    Copy every record from ``source`` into ``target``, matching on id.
    Existing records are overwritten and new ones created. Nothing is deleted.
    Records without an id cannot be matched and are skipped.
    """
    report = {}
    for name in tables:
        src, dst = source.tables[name], target.tables[name]
        fields = set(dst.spec.fields)
        created = updated = skipped = 0

        for record in src.find_many():
            data = {k: v for k, v in record.items() if k in fields}
            if not data.get("id"):
                logger.warning(f"Skipping {name} record without an id: {data}")
                skipped += 1
                continue
            if dst.update(where={"id": data["id"]}, data=data) is None:
                dst.create(data)
                created += 1
            else:
                updated += 1

        report[name] = {"created": created, "updated": updated, "skipped": skipped}
        logger.info(f"Synced {name}: {created} created, {updated} updated, {skipped} skipped")

    target.settings.merge(source.settings.as_dict())
    target.company_info.merge(source.company_info.as_dict())
    return report


def latest_backup(backup_dir: str) -> Optional[str]:
    if not os.path.isdir(backup_dir):
        return None
    names = sorted(n for n in os.listdir(backup_dir) if n.startswith("backup-") and n.endswith(".json.gz"))
    return os.path.join(backup_dir, names[-1]) if names else None
