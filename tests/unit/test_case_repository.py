"""
사건 저장소 단위 테스트
"""
import json
import pytest
from pydantic import ValidationError
from src.db.base import Base
from src.db.connection import DatabaseManager
from src.services.case_repository import CaseRepository, CaseIdGenerator
from src.services.storage import InMemoryKeyValueStore, SqlKeyValueStore
from src.utils.exceptions import StorageError


class TestCaseRepository:
    """CaseRepository 테스트"""

    @pytest.mark.unit
    def test_add_puts_new_case_first(self, repository, sample_summary):
        first = repository.add("first.pdf", "first text", sample_summary)
        second = repository.add("second.pdf", "second text", sample_summary)

        cases = repository.all()

        assert cases[0].id == second.id
        assert cases[1].id == first.id
        assert second.owner_id == "owner-a"
        assert second.created_at > first.created_at

    @pytest.mark.unit
    def test_add_persists_full_set_under_owner_key(self, repository, store, sample_summary):
        case = repository.add("doc.pdf", "text", sample_summary)

        stored = json.loads(store.read("lex-ai-cases-owner-a"))

        assert [item["id"] for item in stored] == [case.id]
        assert stored[0]["ownerId"] == "owner-a"
        assert stored[0]["summary"]["caseName"] == sample_summary.case_name

    @pytest.mark.unit
    def test_add_without_active_owner_returns_none(self, store, sample_summary):
        repo = CaseRepository(store)
        assert repo.add("doc.pdf", "text", sample_summary) is None
        assert len(repo) == 0

    @pytest.mark.unit
    def test_add_for_other_owner_is_rejected(self, repository, sample_summary):
        assert repository.add("doc.pdf", "text", sample_summary, owner_id="owner-b") is None
        assert repository.all() == []

    @pytest.mark.unit
    def test_switching_owner_discards_previous_cases(self, repository, sample_summary):
        repository.add("doc.pdf", "text", sample_summary)

        loaded = repository.load_for_owner("owner-b")

        assert loaded == []
        assert repository.all() == []
        assert repository.owner_id == "owner-b"

    @pytest.mark.unit
    def test_reload_restores_persisted_cases(self, repository, store, sample_summary):
        case = repository.add("doc.pdf", "text", sample_summary)
        repository.load_for_owner("owner-b")

        restored = repository.load_for_owner("owner-a")

        assert [c.id for c in restored] == [case.id]
        assert restored[0].summary.case_name == sample_summary.case_name
        assert restored[0].created_at == case.created_at

    @pytest.mark.unit
    def test_corrupt_payload_recovers_to_empty(self, store):
        store.write("lex-ai-cases-owner-a", "{not json")
        repo = CaseRepository(store)

        assert repo.load_for_owner("owner-a") == []

    @pytest.mark.unit
    def test_payload_with_wrong_shape_recovers_to_empty(self, store):
        store.write("lex-ai-cases-owner-a", json.dumps({"id": "case-1"}))
        repo = CaseRepository(store)

        assert repo.load_for_owner("owner-a") == []

    @pytest.mark.unit
    def test_delete_removes_case_and_persists(self, repository, store, sample_summary):
        keep = repository.add("keep.pdf", "text", sample_summary)
        drop = repository.add("drop.pdf", "text", sample_summary)

        assert repository.delete(drop.id) is True

        assert [c.id for c in repository.all()] == [keep.id]
        assert [item["id"] for item in json.loads(store.read("lex-ai-cases-owner-a"))] == [keep.id]

    @pytest.mark.unit
    def test_delete_missing_case_is_noop(self, repository, store, sample_summary):
        repository.add("doc.pdf", "text", sample_summary)
        before = store.read("lex-ai-cases-owner-a")

        assert repository.delete("case-does-not-exist") is False

        assert store.read("lex-ai-cases-owner-a") == before
        assert len(repository) == 1

    @pytest.mark.unit
    def test_equal_timestamps_keep_insertion_order(self, store, sample_summary, make_case):
        fixed = make_case("x", "x").created_at
        repo = CaseRepository(store, clock=lambda: fixed)
        repo.load_for_owner("owner-a")

        older = repo.add("older.pdf", "text", sample_summary)
        newer = repo.add("newer.pdf", "text", sample_summary)

        assert [c.id for c in repo.all()] == [newer.id, older.id]

    @pytest.mark.unit
    def test_get_returns_case_or_none(self, repository, sample_summary):
        case = repository.add("doc.pdf", "text", sample_summary)
        assert repository.get(case.id) == case
        assert repository.get("missing") is None

    @pytest.mark.unit
    def test_unload_clears_owner(self, repository, sample_summary):
        repository.add("doc.pdf", "text", sample_summary)
        repository.unload()
        assert repository.owner_id is None
        assert repository.all() == []


class TestCaseIdGenerator:
    """사건 ID 생성기 테스트"""

    @pytest.mark.unit
    def test_ids_are_unique_and_monotonic(self):
        generate = CaseIdGenerator()
        ids = [generate() for _ in range(100)]

        assert len(set(ids)) == 100
        assert [int(i.split("-")[1]) for i in ids] == list(range(1, 101))
        assert all(i.startswith("case-") for i in ids)


class TestSqlKeyValueStore:
    """SQLAlchemy 저장소 테스트"""

    @pytest.mark.unit
    def test_write_then_read_and_overwrite(self):
        store = SqlKeyValueStore(DatabaseManager("sqlite://"))

        assert store.read("lex-ai-cases-owner-a") is None
        store.write("lex-ai-cases-owner-a", "[]")
        store.write("lex-ai-cases-owner-a", '[{"id": "case-1"}]')

        assert store.read("lex-ai-cases-owner-a") == '[{"id": "case-1"}]'

    @pytest.mark.unit
    def test_repository_on_sql_store_is_owner_scoped(self, sample_summary):
        store = SqlKeyValueStore(DatabaseManager("sqlite://"))
        repo = CaseRepository(store)
        repo.load_for_owner("owner-a")
        case = repo.add("doc.pdf", "text", sample_summary)

        other = CaseRepository(store)
        assert other.load_for_owner("owner-b") == []
        assert [c.id for c in other.load_for_owner("owner-a")] == [case.id]


@pytest.mark.unit
def test_in_memory_store_initial_data():
    store = InMemoryKeyValueStore({"k": "v"})
    assert store.read("k") == "v"
    assert store.read("missing") is None


class FailingStore(InMemoryKeyValueStore):
    """지정한 동작에서 StorageError를 내는 저장소"""

    def __init__(self, initial=None, fail_read=False, fail_write=False):
        super().__init__(initial)
        self.fail_read = fail_read
        self.fail_write = fail_write

    def read(self, key):
        if self.fail_read:
            raise StorageError("database is locked")
        return super().read(key)

    def write(self, key, value):
        if self.fail_write:
            raise StorageError("disk I/O error")
        super().write(key, value)


class TestStorageFailures:
    """저장소 오류 시 메모리 상태 보존 테스트"""

    @pytest.mark.unit
    def test_failed_write_does_not_add_case(self, sample_summary):
        store = FailingStore(fail_write=True)
        repo = CaseRepository(store)
        repo.load_for_owner("owner-a")

        with pytest.raises(StorageError):
            repo.add("doc.pdf", "text", sample_summary)

        assert repo.all() == []
        assert store.read("lex-ai-cases-owner-a") is None

    @pytest.mark.unit
    def test_failed_write_keeps_deleted_case(self, sample_summary):
        store = FailingStore()
        repo = CaseRepository(store)
        repo.load_for_owner("owner-a")
        case = repo.add("doc.pdf", "text", sample_summary)
        before = store.read("lex-ai-cases-owner-a")

        store.fail_write = True
        with pytest.raises(StorageError):
            repo.delete(case.id)

        assert [c.id for c in repo.all()] == [case.id]
        assert store.read("lex-ai-cases-owner-a") == before

    @pytest.mark.unit
    def test_failed_read_propagates_and_keeps_stored_cases(self, sample_summary):
        store = FailingStore()
        repo = CaseRepository(store)
        repo.load_for_owner("owner-a")
        case = repo.add("doc.pdf", "text", sample_summary)
        stored = store.read("lex-ai-cases-owner-a")

        store.fail_read = True
        fresh = CaseRepository(store)
        with pytest.raises(StorageError):
            fresh.load_for_owner("owner-a")

        # 로드 실패 후에는 활성 소유자가 없으므로 덮어쓰기도 불가
        assert fresh.owner_id is None
        assert fresh.add("new.pdf", "text", sample_summary) is None
        store.fail_read = False
        assert store.read("lex-ai-cases-owner-a") == stored
        assert json.loads(stored)[0]["id"] == case.id

    @pytest.mark.unit
    def test_sql_read_failure_raises_storage_error(self):
        database = DatabaseManager("sqlite://")
        store = SqlKeyValueStore(database)
        Base.metadata.drop_all(database.engine)

        with pytest.raises(StorageError):
            store.read("lex-ai-cases-owner-a")


@pytest.mark.unit
def test_saved_summary_cannot_be_mutated(repository, sample_summary):
    case = repository.add("doc.pdf", "text", sample_summary)

    with pytest.raises(ValidationError):
        case.summary.case_name = "Changed"

    assert repository.get(case.id).summary.case_name == sample_summary.case_name
