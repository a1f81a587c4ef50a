from app.services.fallback import read_with_fallback
from app.storage.store import build_local_store


def read_brands(store):
    return store.brands.find_many()


def test_primary_store_is_used(catalog):
    result = read_with_fallback(catalog, read_brands)
    assert result.source == "local"
    assert result.warning is None
    assert len(result.data) == 2


def test_falls_back_to_second_store(tmp_path, catalog):
    broken_dir = tmp_path / "broken"
    broken_dir.mkdir()
    (broken_dir / "brands.json").write_text("{oops", encoding="utf-8")
    broken = build_local_store(str(broken_dir))

    result = read_with_fallback(broken, read_brands, fallback=catalog)
    assert len(result.data) == 2
    assert "CorruptStorageError" in result.warning


def test_falls_back_to_default(tmp_path):
    broken_dir = tmp_path / "broken"
    broken_dir.mkdir()
    (broken_dir / "brands.json").write_text("{oops", encoding="utf-8")
    broken = build_local_store(str(broken_dir))

    result = read_with_fallback(broken, read_brands, default=dict)
    assert result.data == {}
    assert result.source == "default"
