import pytest

from app.storage.errors import CorruptStorageError


def test_missing_file_is_empty(store):
    assert store.settings.as_dict() == {}
    assert store.settings.find_many() == []
    assert store.settings.get("site_name") is None


def test_merge_is_shallow(data_dir, store):
    store.company_info.merge({"name": "Rent Car", "phone": "02-000-0000"})
    result = store.company_info.merge({"phone": "1588-0000"})
    assert result == {"name": "Rent Car", "phone": "1588-0000"}
    assert (data_dir / "company-info.json").exists()


def test_values_are_stored_as_strings(store):
    store.settings.set("popular_limit", 8)
    assert store.settings.get("popular_limit") == "8"


def test_upsert_returns_pair(store):
    assert store.settings.upsert("site_name", "Rent") == {"key": "site_name", "value": "Rent"}
    assert store.settings.find_many() == [{"key": "site_name", "value": "Rent"}]


def test_empty_value_reads_as_unset(store):
    store.settings.set("banner", "")
    assert store.settings.get("banner") is None


def test_array_file_is_corrupt(data_dir, store):
    (data_dir / "settings.json").write_text("[]", encoding="utf-8")
    with pytest.raises(CorruptStorageError):
        store.settings.as_dict()
