import pytest

from errors import AlreadyCompleted, AlreadyStarted, ModuleNotFoundOrNotStarted, NotFoundError
from learning import (
    continue_module,
    credits_per_lesson,
    list_modules,
    list_progress,
    list_progress_with_modules,
    start_module,
)
from seed import DEFAULT_USER_ID
from users import create_user


@pytest.fixture
def learner(store):
    return create_user(store, "new_farmer", "new@example.com", "Meera", "Iyer")


def test_catalog_is_seeded(store):
    modules = list_modules(store)
    assert len(modules) == 6
    assert modules[0].id == "module-1"
    assert modules[2].prerequisite_modules == ["module-2"]


def test_credits_per_lesson_floors(store):
    assert credits_per_lesson(store.learning_modules["module-1"]) == 18
    assert credits_per_lesson(store.learning_modules["module-2"]) == 33


def test_start_creates_fresh_record(store, learner):
    progress = start_module(store, learner.id, "module-1")
    assert progress.completed_lessons == 0
    assert progress.current_lesson == 1
    assert progress.progress == 0
    assert progress.credits_earned == 0
    assert progress.completed is False
    assert progress.started_at == store.now()


def test_start_twice_fails_without_duplicate(store, learner):
    start_module(store, learner.id, "module-1")
    with pytest.raises(AlreadyStarted):
        start_module(store, learner.id, "module-1")
    assert len(list_progress(store, learner.id)) == 1


def test_start_seeded_module_fails(store):
    with pytest.raises(AlreadyStarted):
        start_module(store, DEFAULT_USER_ID, "module-1")


def test_start_unknown_module(store, learner):
    with pytest.raises(NotFoundError):
        start_module(store, learner.id, "module-99")
    assert list_progress(store, learner.id) == []


def test_full_module_loses_remainder(store, learner):
    """8 lessons at floor(150 / 8) = 18 credits pay out 144, not 150."""
    start_module(store, learner.id, "module-1")
    for lesson in range(1, 9):
        progress, earned = continue_module(store, learner.id, "module-1")
        assert earned == 18
        assert progress.completed_lessons == lesson
        assert progress.completed is (lesson == 8)

    assert progress.progress == 100
    assert progress.credits_earned == 144
    assert progress.completed_at == store.now()
    user = store.users[learner.id]
    assert user.sustaina_credits == 144
    assert user.learning_streak == 8


def test_continue_after_completion_fails(store, learner):
    start_module(store, learner.id, "module-2")
    for _ in range(6):
        continue_module(store, learner.id, "module-2")
    credits = store.users[learner.id].sustaina_credits
    with pytest.raises(AlreadyCompleted):
        continue_module(store, learner.id, "module-2")
    assert store.users[learner.id].sustaina_credits == credits


def test_continue_seeded_completed_module(store):
    with pytest.raises(AlreadyCompleted):
        continue_module(store, DEFAULT_USER_ID, "module-2")


def test_continue_rounds_progress(store):
    progress, earned = continue_module(store, DEFAULT_USER_ID, "module-3")
    assert earned == 25
    assert progress.completed_lessons == 6
    assert progress.current_lesson == 7
    assert progress.progress == 50
    assert progress.credits_earned == 150


def test_continue_updates_user(store):
    user = store.users[DEFAULT_USER_ID]
    credits, streak = user.sustaina_credits, user.learning_streak
    continue_module(store, DEFAULT_USER_ID, "module-1")
    assert user.sustaina_credits == credits + 18
    assert user.learning_streak == streak + 1


def test_continue_not_started(store):
    with pytest.raises(ModuleNotFoundOrNotStarted):
        continue_module(store, DEFAULT_USER_ID, "module-4")


def test_continue_unknown_module(store):
    with pytest.raises(ModuleNotFoundOrNotStarted):
        continue_module(store, DEFAULT_USER_ID, "module-99")


def test_progress_with_modules(store):
    rows = list_progress_with_modules(store, DEFAULT_USER_ID)
    assert {r.module_id for r in rows} == {"module-1", "module-2", "module-3"}
    for row in rows:
        assert row.module.id == row.module_id
