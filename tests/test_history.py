"""Tests for undo/redo."""
from floorplanner.core.model import ElementType, SelectionElement
from floorplanner.engine.history import HistoryManager
from floorplanner.io.plan import plan_to_dict


def state(editor):
    record = plan_to_dict(editor.name, editor.floors, editor.store.groups)
    return record["floors"], record["groups"], list(editor.selected_elements)


class TestHistoryManager:
    def test_starts_empty(self, store):
        history = HistoryManager(store)
        assert history.index == -1
        assert not history.can_undo
        assert not history.can_redo
        assert not history.undo()

    def test_snapshot_shares_frozen_objects(self, store):
        history = HistoryManager(store)
        snapshot = history.add_to_history()
        assert snapshot.floors[0] is store.floors[0]
        store.move_shape("floor-1", "T", 0, 300)
        assert snapshot.floors[0].shapes[2].y == 100.0

    def test_reset(self, store):
        history = HistoryManager(store)
        history.add_to_history()
        history.add_to_history()
        history.reset()
        assert history.history == []
        assert history.index == -1


class TestEditorHistory:
    def test_initial_snapshot_cannot_be_undone(self, editor):
        assert editor.history.index == 0
        before = state(editor)
        assert not editor.undo()
        assert state(editor) == before

    def test_undo_restores_previous_state(self, editor):
        before = state(editor)
        editor.move_shape("floor-1", "T", 300, 300)
        editor.commit()

        assert editor.undo()
        assert state(editor) == before
        assert editor.store.get_shape("floor-1", "T").x == 100.0

    def test_undo_all_then_redo_all(self, editor):
        states = [state(editor)]

        editor.select_shape("A")
        editor.select_shape("B", additive=True)
        editor.create_group()
        editor.commit()
        states.append(state(editor))

        group_id = editor.selected_elements[0].id
        editor.rotate_group(group_id, 90)
        editor.commit()
        states.append(state(editor))

        editor.delete_shape("floor-2", "C")
        editor.commit()
        states.append(state(editor))

        editor.add_floor("Terrace")
        editor.commit()
        states.append(state(editor))

        for expected in reversed(states[:-1]):
            assert editor.undo()
            assert state(editor) == expected
        assert not editor.undo()

        for expected in states[1:]:
            assert editor.redo()
            assert state(editor) == expected
        assert not editor.redo()

    def test_new_action_discards_redo(self, editor):
        editor.move_shape("floor-1", "T", 300, 300)
        editor.commit()
        editor.undo()
        assert editor.history.can_redo

        editor.move_shape("floor-1", "T", 10, 300)
        editor.commit()

        assert not editor.history.can_redo
        assert not editor.redo()
        assert len(editor.history.history) == 2

    def test_selection_is_restored(self, editor):
        editor.select_shape("T")
        editor.commit()
        editor.delete_shape("floor-1", "T")
        editor.commit()
        assert editor.selected_elements == []

        editor.undo()
        assert editor.selected_elements == [SelectionElement("T", ElementType.SHAPE, "floor-1")]
