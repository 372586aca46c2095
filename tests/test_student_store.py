import time

import pytest
from pydantic import ValidationError
from sqlalchemy import text
from sqlalchemy.exc import OperationalError, IntegrityError

from schemas.students import DeleteResult
from services.exceptions import ConnectivityError, QueryError


def test_create_assigns_id_and_derived_fields(store):
    ana = store.create("Ana", "A", 95, 92, 91)

    assert ana.id is not None
    assert ana.average == pytest.approx(92.6666667)
    assert ana.remarks == "Excellent"
    assert ana.created_at == ana.updated_at


def test_create_blank_section_defaults_to_placeholder(store):
    assert store.create("Cy", "", 80, 80, 80).section == "N/A"
    assert store.create("Di", None, 80, 80, 80).section == "N/A"


@pytest.mark.parametrize("kwargs", [
    dict(name="John3", section="A", math=80, science=80, english=80),
    dict(name="", section="A", math=80, science=80, english=80),
    dict(name="Ana", section="A", math=101, science=80, english=80),
    dict(name="Ana", section="A", math=80, science=-1, english=80),
])
def test_create_rejects_invalid_input(store, kwargs):
    with pytest.raises(ValidationError):
        store.create(**kwargs)
    assert store.list_all() == []


def test_create_then_find_round_trip(store):
    store.create("Bo", "B", 70, 60, 65)

    found = store.find_exact_by_name("bo")

    assert found is not None
    assert found.average == pytest.approx(65.0)
    assert found.remarks == "Needs Improvement"


def test_list_all_ordered_by_id(store):
    assert store.list_all() == []
    store.create("Zed", "A", 80, 80, 80)
    store.create("Amy", "A", 80, 80, 80)

    assert [s.name for s in store.list_all()] == ["Zed", "Amy"]


def test_ids_not_reused_after_delete(store):
    first = store.create("Ana", "A", 80, 80, 80)
    store.delete("Ana", confirmed=True)
    second = store.create("Bo", "A", 80, 80, 80)

    assert second.id > first.id
    assert store.get(first.id) is None
    assert store.get(second.id).name == "Bo"


def test_find_by_name_substring_case_insensitive(store):
    store.create("Mary Ann", "A", 80, 80, 80)
    store.create("Ann Lee", "B", 80, 80, 80)
    store.create("Bob", "B", 80, 80, 80)

    assert [s.name for s in store.find_by_name("ANN")] == ["Ann Lee", "Mary Ann"]
    assert store.find_by_name("zzz") == []


def test_find_by_name_requires_valid_query(store):
    with pytest.raises(ValueError):
        store.find_by_name("Ann3")


def test_find_by_section_exact_case_insensitive(store):
    store.create("Ana", "A", 95, 92, 91)
    store.create("Bo", "B", 70, 60, 65)
    store.create("Al", "AB", 80, 80, 80)

    assert [s.name for s in store.find_by_section("a")] == ["Ana"]


def test_update_recomputes_derived_fields(store):
    created = store.create("Ana", "A", 95, 92, 91)
    time.sleep(1.1)

    updated = store.update("ana", "Ana Maria", "C", 70, 70, 70)

    assert updated.id == created.id
    assert updated.name == "Ana Maria"
    assert updated.section == "C"
    assert updated.average == pytest.approx(70)
    assert updated.remarks == "Needs Improvement"
    assert updated.created_at == created.created_at
    assert updated.updated_at > created.updated_at


def test_update_blank_name_and_section_keep_values(store):
    store.create("Ana", "A", 95, 92, 91)

    updated = store.update("Ana", "", "  ", 80, 75, 70)

    assert updated.name == "Ana"
    assert updated.section == "A"
    assert updated.average == pytest.approx(75)
    assert updated.remarks == "Good"


def test_update_not_found(store):
    assert store.update("Nobody", None, None, 80, 80, 80) is None


def test_update_rejects_invalid_new_name(store):
    store.create("Ana", "A", 95, 92, 91)
    with pytest.raises(ValidationError):
        store.update("Ana", "Ana2", None, 80, 80, 80)
    assert store.find_exact_by_name("Ana").average == pytest.approx(92.6666667)


def test_duplicate_names_first_match_wins(store):
    first = store.create("Sam", "A", 80, 80, 80)
    second = store.create("sam", "B", 60, 60, 60)

    assert store.find_exact_by_name("SAM").id == first.id

    store.update("Sam", None, None, 100, 100, 100)
    assert store.get(first.id).average == pytest.approx(100)
    assert store.get(second.id).average == pytest.approx(60)

    assert store.delete("Sam", confirmed=True) is DeleteResult.DELETED
    assert store.get(first.id) is None
    assert store.get(second.id) is not None


def test_scenario_create_search_delete(store):
    ana = store.create("Ana", "A", 95, 92, 91)
    bo = store.create("Bo", "B", 70, 60, 65)

    assert ana.remarks == "Excellent"
    assert bo.average == pytest.approx(65.0)
    assert [s.name for s in store.find_by_section("a")] == ["Ana"]

    assert store.delete("Ana", confirmed=False) is DeleteResult.CANCELLED
    assert store.find_exact_by_name("Ana") is not None

    assert store.delete("Ana", confirmed=True) is DeleteResult.DELETED
    assert store.find_exact_by_name("Ana") is None
    assert store.delete("Ana", confirmed=True) is DeleteResult.NOT_FOUND


def test_collect_scores(store):
    store.create("Ana", "A", 95, 92, 91)
    store.create("Bo", "B", 70, 60, 65)

    columns = store.collect_scores()

    assert sorted(columns.math) == [70, 95]
    assert sorted(columns.english) == [65, 91]
    assert len(columns.averages) == 2


def test_connectivity_errors_are_translated(store, monkeypatch):
    def boom(*args, **kwargs):
        raise OperationalError("SELECT", {}, Exception("server has gone away"))

    monkeypatch.setattr(store.db, "query", boom)

    with pytest.raises(ConnectivityError):
        store.list_all()


def test_query_errors_are_translated(store, monkeypatch):
    def boom():
        raise IntegrityError("INSERT", {}, Exception("constraint failed"))

    monkeypatch.setattr(store.db, "commit", boom)

    with pytest.raises(QueryError):
        store.create("Ana", "A", 80, 80, 80)


def test_scores_default_to_zero_in_table(store):
    store.db.execute(text("INSERT INTO students (name, section) VALUES ('Legacy', 'A')"))
    store.db.commit()

    legacy = store.find_exact_by_name("Legacy")

    assert (legacy.math, legacy.science, legacy.english, legacy.average) == (0, 0, 0, 0)


def test_null_scores_read_as_zero(store):
    store.create("Ana", "A", 95, 92, 91)
    store.db.execute(text(
        "INSERT INTO students (name, section, math, science, english, average) "
        "VALUES ('Legacy', 'A', NULL, NULL, NULL, NULL)"
    ))
    store.db.commit()

    columns = store.collect_scores()

    assert sorted(columns.math) == [0, 95]
    assert sorted(columns.averages)[0] == 0
    assert store.find_exact_by_name("Legacy").average == 0


def test_section_is_stripped(store):
    store.create("Ana", " A ", 95, 92, 91)
    assert store.find_exact_by_name("Ana").section == "A"
    assert [s.name for s in store.find_by_section(" a ")] == ["Ana"]

    updated = store.update("Ana", None, "  B  ", 80, 80, 80)
    assert updated.section == "B"
