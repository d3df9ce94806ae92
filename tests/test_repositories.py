import os

import pytest

from todo_api.db import SQLiteRepository
from todo_api.repositories import InMemoryRepository, get_repository


def entity(name="Task", priority=1, completed=False, description=None, id=None):
    return {
        "id": id,
        "name": name,
        "description": description,
        "priority": priority,
        "completed": completed,
    }


@pytest.fixture(params=["memory", "sqlite"])
def repo(request, tmp_path):
    if request.param == "sqlite":
        return SQLiteRepository(str(tmp_path / "data" / "todos.db"))
    return InMemoryRepository()


class TestRepositoryContract:
    def test_save_inserts_with_new_id(self, repo):
        first = repo.save(entity(name="One"))
        second = repo.save(entity(name="Two"))
        assert first["id"] is not None
        assert second["id"] is not None
        assert first["id"] != second["id"]
        assert repo.find_by_id(first["id"]) == first

    def test_save_with_id_replaces(self, repo):
        saved = repo.save(entity(name="One", description="x", completed=True))
        replaced = repo.save(entity(id=saved["id"], name="Uno", priority=None, completed=None))
        assert replaced == entity(id=saved["id"], name="Uno", priority=None, completed=None)
        assert len(repo.list_all()) == 1

    def test_saved_copy_is_detached(self, repo):
        saved = repo.save(entity(name="One"))
        saved["name"] = "Mutated"
        assert repo.find_by_id(saved["id"])["name"] == "One"

    def test_list_all_order(self, repo):
        repo.save(entity(name="b", priority=1))
        repo.save(entity(name="B", priority=2))
        repo.save(entity(name="A", priority=2))
        repo.save(entity(name="Z", priority=5))
        repo.save(entity(name="none", priority=None))
        assert [t["name"] for t in repo.list_all()] == ["Z", "A", "B", "b", "none"]

    def test_priority_lookups(self, repo):
        repo.save(entity(name="One", priority=1))
        repo.save(entity(name="Two", priority=2))
        assert repo.exists_by_priority(2)
        assert not repo.exists_by_priority(3)
        assert [t["name"] for t in repo.find_by_priority(2)] == ["Two"]
        assert repo.find_by_priority(3) == []

    def test_name_lookups_ignore_case(self, repo):
        repo.save(entity(name="Walk Dog"))
        repo.save(entity(name="WALK DOG"))
        repo.save(entity(name="Feed Cat"))
        assert repo.exists_by_name("walk dog")
        assert not repo.exists_by_name("walk")
        assert sorted(t["name"] for t in repo.find_by_name_ignore_case("walk dog")) == ["WALK DOG", "Walk Dog"]

    def test_exists_and_delete_by_id(self, repo):
        saved = repo.save(entity())
        assert repo.exists_by_id(saved["id"])
        repo.delete_by_id(saved["id"])
        assert not repo.exists_by_id(saved["id"])
        assert repo.find_by_id(saved["id"]) is None
        # Deleting a missing id is a no-op
        repo.delete_by_id(saved["id"])


class TestSQLiteRepository:
    def test_data_survives_reopen(self, tmp_path):
        path = str(tmp_path / "todos.db")
        saved = SQLiteRepository(path).save(entity(name="Persisted", priority=3, completed=True))
        reopened = SQLiteRepository(path)
        assert reopened.find_by_id(saved["id"]) == saved

    def test_ids_not_reused_after_delete(self, tmp_path):
        repo = SQLiteRepository(str(tmp_path / "todos.db"))
        first = repo.save(entity(name="One"))
        repo.delete_by_id(first["id"])
        second = repo.save(entity(name="Two"))
        assert second["id"] != first["id"]


class TestGetRepository:
    @pytest.fixture(autouse=True)
    def clear_cache(self):
        get_repository.cache_clear()
        yield
        get_repository.cache_clear()

    def test_memory_backend(self, monkeypatch):
        monkeypatch.setenv("PERSISTENCE_BACKEND", "memory")
        repo = get_repository()
        assert isinstance(repo, InMemoryRepository)
        assert get_repository() is repo

    def test_sqlite_backend(self, monkeypatch, tmp_path):
        db_path = tmp_path / "nested" / "todos.db"
        monkeypatch.setenv("PERSISTENCE_BACKEND", "sqlite")
        monkeypatch.setenv("SQLITE_DB_PATH", str(db_path))
        assert isinstance(get_repository(), SQLiteRepository)
        assert os.path.exists(db_path)
