"""
Tests for the drag-and-drop protocol between project items and lanes.
"""
import pytest

from pkg.board.dnd import DRAG_EFFECT, DRAG_MEDIA_TYPE, DragError, DragSession
from pkg.board.schema import LaneKind, ProjectStatus
from pkg.board.surface import DataTransfer, DragEvent
from pkg.board.views import DropState


@pytest.fixture
def project(board):
    assert board.submit("Website", "Relaunch the company site", 3)
    return board.store.projects[0]


class TestDragSource:

    def test_drag_start_sets_payload(self, board, project):
        session = board.session()
        transfer = session.start(project.id)
        assert transfer.types == [DRAG_MEDIA_TYPE]
        assert transfer.get_data(DRAG_MEDIA_TYPE) == project.id
        assert transfer.effect_allowed == DRAG_EFFECT

    def test_drag_end_changes_nothing(self, board, project, recorder):
        board.store.add_listener(recorder)
        before = board.snapshot()
        session = board.session()
        session.start(project.id)
        session.end()
        assert board.snapshot() == before
        assert recorder.calls == []
        assert not session.active


class TestDropTarget:

    def test_drag_over_accepts_project_payload(self, board, project):
        session = board.session()
        session.start(project.id)
        assert session.over("finished-projects-list")
        assert board.lane(LaneKind.FINISHED).drop_state == DropState.HIGHLIGHTED
        assert board.lane(LaneKind.ACTIVE).drop_state == DropState.IDLE

    def test_drag_over_ignores_other_payloads(self, board, project):
        lane = board.lane(LaneKind.FINISHED)
        transfer = DataTransfer()
        transfer.set_data("text/uri-list", "https://example.com")
        transfer.set_data(DRAG_MEDIA_TYPE, project.id)
        event = DragEvent("dragover", transfer)
        lane.list_el.dispatch_event(event)
        assert not event.default_prevented
        assert lane.drop_state == DropState.IDLE

    def test_drag_over_without_payload(self, board, project):
        lane = board.lane(LaneKind.FINISHED)
        event = DragEvent("dragover", None)
        lane.element.dispatch_event(event)
        assert lane.drop_state == DropState.IDLE

    def test_drag_leave_reverts_to_idle_without_store_change(self, board, project, recorder):
        board.store.add_listener(recorder)
        session = board.session()
        session.start(project.id)
        session.over("finished-projects-list")
        session.leave("finished-projects-list")
        assert board.lane(LaneKind.FINISHED).drop_state == DropState.IDLE
        assert recorder.calls == []

    def test_drag_leave_when_idle(self, board, project):
        session = board.session()
        session.start(project.id)
        session.leave("finished-projects")
        assert board.lane(LaneKind.FINISHED).drop_state == DropState.IDLE

    def test_drop_moves_project_and_reverts(self, board, project):
        session = board.session()
        session.start(project.id)
        session.over("finished-projects-list")
        assert session.drop("finished-projects-list")
        session.end()

        assert board.store.get(project.id).status == ProjectStatus.FINISHED
        assert board.lane(LaneKind.FINISHED).drop_state == DropState.IDLE
        assert board.lane(LaneKind.ACTIVE).assigned_projects == []
        assert [p.id for p in board.lane(LaneKind.FINISHED).assigned_projects] == [project.id]

    def test_drop_on_own_lane_is_noop(self, board, project, recorder):
        board.store.add_listener(recorder)
        assert board.drag(project.id, LaneKind.ACTIVE)
        assert recorder.calls == []
        assert board.lane(LaneKind.ACTIVE).drop_state == DropState.IDLE

    def test_drop_with_unknown_id_is_silent(self, board, project, recorder):
        board.store.add_listener(recorder)
        lane = board.lane(LaneKind.FINISHED)
        transfer = DataTransfer()
        transfer.set_data(DRAG_MEDIA_TYPE, "prj-unknown")
        lane.list_el.dispatch_event(DragEvent("dragover", transfer))
        lane.list_el.dispatch_event(DragEvent("drop", transfer))
        assert recorder.calls == []
        assert lane.drop_state == DropState.IDLE

    def test_drop_requires_accepted_drag_over(self, board, project):
        session = board.session()
        session.start(project.id)
        assert not session.drop("finished-projects-list")
        assert board.store.get(project.id).status == ProjectStatus.ACTIVE


class TestDragSession:

    def test_steps_require_start(self, document):
        session = DragSession(document)
        with pytest.raises(DragError):
            session.over("app")
        with pytest.raises(DragError):
            session.end()

    def test_restart_abandons_unfinished_drag(self, board, project):
        session = board.session()
        session.start(project.id)
        session.over("finished-projects-list")
        assert board.lane(LaneKind.FINISHED).drop_state == DropState.HIGHLIGHTED

        transfer = session.start(project.id)
        assert session.active
        assert transfer.get_data(DRAG_MEDIA_TYPE) == project.id
        assert board.lane(LaneKind.FINISHED).drop_state == DropState.IDLE
        assert board.store.get(project.id).status == ProjectStatus.ACTIVE

        session.over("finished-projects-list")
        assert session.drop("finished-projects-list")
        assert board.store.get(project.id).status == ProjectStatus.FINISHED

    def test_abandon_when_idle_is_noop(self, document):
        session = DragSession(document)
        session.abandon()
        assert not session.active

    def test_unknown_element(self, board):
        with pytest.raises(KeyError):
            board.session().start("prj-missing")

    def test_move_back_and_forth(self, board, project, recorder):
        board.store.add_listener(recorder)
        assert board.drag(project.id, "finished")
        assert board.drag(project.id, "active")
        assert [snap[0].status for snap in recorder.calls] == [ProjectStatus.FINISHED, ProjectStatus.ACTIVE]
