import pytest

from dreampop.store import (
    BucketExists,
    BucketNotFound,
    BucketStore,
    StoreError,
    default_path,
    open_store,
)


@pytest.fixture
def store(tmp_path):
    with BucketStore(tmp_path / "test.db") as s:
        yield s


def test_open_store_creates_standard_buckets(tmp_path):
    with open_store(tmp_path / "sub" / "dir" / "dreampop.db") as s:
        assert s.bucket_names() == ["history", "internal", "notes"]
        assert s.get("internal", b"self") == b"notes"


def test_open_store_keeps_existing_self(tmp_path):
    path = tmp_path / "dreampop.db"
    with open_store(path) as s:
        s.create_bucket("work")
        s.put("internal", b"self", b"work")
    with open_store(path) as s:
        assert s.get("internal", b"self") == b"work"
        assert "work" in s.bucket_names()


def test_default_path_filename():
    path = default_path()
    assert path.name == "dreampop.db"
    assert path.parent.name == "dreampop"


def test_create_bucket_twice_raises(store):
    store.create_bucket("a")
    with pytest.raises(BucketExists):
        store.create_bucket("a")


def test_create_bucket_if_not_exists_is_idempotent(store):
    store.create_bucket_if_not_exists("a")
    store.put("a", b"k", b"v")
    store.create_bucket_if_not_exists("a")
    assert store.get("a", b"k") == b"v"


def test_empty_bucket_name_rejected(store):
    with pytest.raises(StoreError):
        store.create_bucket("")


def test_bucket_names_sorted(store):
    for name in ["zeta", "alpha", "mid"]:
        store.create_bucket(name)
    assert store.bucket_names() == sorted(["zeta", "alpha", "mid"])


def test_put_get_delete_roundtrip(store):
    store.create_bucket("b")
    store.put("b", b"key", b"value")
    assert store.get("b", b"key") == b"value"
    store.delete("b", b"key")
    assert store.get("b", b"key") is None


def test_put_empty_key_rejected(store):
    store.create_bucket("b")
    with pytest.raises(StoreError):
        store.put("b", b"", b"value")


def test_missing_bucket_operations_raise(store):
    with pytest.raises(BucketNotFound):
        store.get("nope", b"k")
    with pytest.raises(BucketNotFound):
        store.put("nope", b"k", b"v")
    with pytest.raises(BucketNotFound):
        store.delete_bucket("nope")
    with pytest.raises(BucketNotFound):
        store.next_sequence("nope")


def test_next_sequence_increments_and_resets(store):
    store.create_bucket("b")
    first = store.next_sequence("b")
    second = store.next_sequence("b")
    assert first == 1
    assert second == first + 1
    store.delete_bucket("b")
    store.create_bucket("b")
    assert store.next_sequence("b") == first


def test_items_in_key_order(store):
    store.create_bucket("b")
    keys = [(3).to_bytes(8, "big"), (1).to_bytes(8, "big"), (256).to_bytes(8, "big")]
    for key in keys:
        store.put("b", key, key[-1:])
    assert [k for k, _ in store.items("b")] == sorted(keys)


def test_delete_bucket_removes_entries(store):
    store.create_bucket("b")
    store.put("b", b"k", b"v")
    store.delete_bucket("b")
    store.create_bucket("b")
    assert store.items("b") == []


def test_rename_bucket_moves_contents(store):
    store.create_bucket("old")
    store.put("old", b"k", b"v")
    store.rename_bucket("old", "new")
    assert not store.has_bucket("old")
    assert store.get("new", b"k") == b"v"


def test_rename_bucket_errors(store):
    store.create_bucket("a")
    store.create_bucket("b")
    with pytest.raises(BucketExists):
        store.rename_bucket("a", "b")
    with pytest.raises(BucketNotFound):
        store.rename_bucket("missing", "c")


def test_transaction_rolls_back_on_error(store):
    store.create_bucket("b")
    with pytest.raises(RuntimeError):
        with store.transaction():
            store.put("b", b"k", b"v")
            raise RuntimeError("boom")
    assert store.get("b", b"k") is None


def test_nested_transaction_rolls_back_inner_only(store):
    store.create_bucket("b")
    with store.transaction():
        store.put("b", b"outer", b"1")
        with pytest.raises(BucketExists):
            with store.transaction():
                store.put("b", b"inner", b"2")
                store.create_bucket("b")
    assert store.get("b", b"outer") == b"1"
    assert store.get("b", b"inner") is None