import pytest

from restart_reminder import exceptions
from restart_reminder.services.defer_store import FileDeferStore, InMemoryDeferStore


@pytest.fixture
def store(tmp_path):
    return FileDeferStore(tmp_path / "defer_count.txt")


def test_missing_record_reads_as_zero(store):
    assert store.get() == 0


@pytest.mark.parametrize("content", ["", "\n", "abc", "-3", "2.5", "1 2", "9" * 5000])
def test_corrupt_record_reads_as_zero(store, content):
    store.path.write_text(content)

    assert store.get() == 0


def test_record_with_trailing_newline_is_read(store):
    store.path.write_text("2\n")

    assert store.get() == 2


def test_increment_persists_ascii_decimal(store):
    assert store.increment() == 1
    assert store.increment() == 2

    assert store.path.read_text().strip() == "2"
    assert FileDeferStore(store.path).get() == 2


def test_increment_recovers_from_corrupt_record(store):
    store.path.write_text("garbage")

    assert store.increment() == 1


def test_reset_removes_record(store):
    store.increment()
    store.reset()

    assert not store.path.exists()
    assert store.get() == 0


def test_reset_without_record_is_a_no_op(store):
    store.reset()

    assert store.get() == 0


def test_increment_write_failure_raises(tmp_path):
    store = FileDeferStore(tmp_path / "missing" / "defer_count.txt")

    with pytest.raises(exceptions.PersistWriteFailure) as excinfo:
        store.increment()
    assert excinfo.value.error_code == "PERSIST_WRITE_FAILED"


def test_reset_failure_raises(tmp_path):
    record = tmp_path / "defer_count.txt"
    record.mkdir()
    store = FileDeferStore(record)

    assert store.get() == 0
    with pytest.raises(exceptions.PersistWriteFailure):
        store.reset()


def test_in_memory_store_follows_the_same_contract():
    store = InMemoryDeferStore(2)

    assert store.get() == 2
    assert store.increment() == 3
    store.reset()
    assert store.get() == 0
    assert InMemoryDeferStore(-4).get() == 0


def test_increment_recovers_from_oversized_record(store):
    store.path.write_text("9" * 5000)

    assert store.increment() == 1
