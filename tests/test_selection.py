"""
Tests for the selection broadcast service.
"""
from __future__ import annotations

from image_gallery.selection import EMPTY_SELECTION, SelectionService, StructuredSelection


class TestStructuredSelection:
    def test_of_and_first_element(self):
        sel = StructuredSelection.of("a", "b")
        assert len(sel) == 2
        assert list(sel) == ["a", "b"]
        assert sel.first_element == "a"
        assert not sel.is_empty()

    def test_empty(self):
        assert EMPTY_SELECTION.is_empty()
        assert EMPTY_SELECTION.first_element is None


class TestSelectionService:
    def test_broadcast_in_registration_order(self):
        service = SelectionService()
        calls = []
        service.add_selection_listener(lambda src, sel: calls.append(("first", src, sel)))
        service.add_selection_listener(lambda src, sel: calls.append(("second", src, sel)))
        sel = StructuredSelection.of("node")
        service.set_selection("tree", sel)
        assert calls == [("first", "tree", sel), ("second", "tree", sel)]
        assert service.get_selection() is sel
        assert service.get_source() == "tree"

    def test_duplicate_listener_registered_once(self):
        service = SelectionService()
        calls = []

        def listener(src, sel):
            calls.append(sel)

        service.add_selection_listener(listener)
        service.add_selection_listener(listener)
        service.set_selection(None, EMPTY_SELECTION)
        assert len(calls) == 1
        assert service.listener_count() == 1

    def test_remove_listener(self):
        service = SelectionService()
        calls = []

        def listener(src, sel):
            calls.append(sel)

        service.add_selection_listener(listener)
        assert service.remove_selection_listener(listener) is True
        assert service.remove_selection_listener(listener) is False
        service.set_selection(None, EMPTY_SELECTION)
        assert calls == []

    def test_failing_listener_does_not_stop_others(self):
        service = SelectionService()
        calls = []

        def broken(src, sel):
            raise RuntimeError("boom")

        service.add_selection_listener(broken)
        service.add_selection_listener(lambda src, sel: calls.append(sel))
        service.set_selection(None, EMPTY_SELECTION)
        assert calls == [EMPTY_SELECTION]

    def test_listener_may_unregister_during_broadcast(self):
        service = SelectionService()
        calls = []

        def once(src, sel):
            calls.append("once")
            service.remove_selection_listener(once)

        service.add_selection_listener(once)
        service.add_selection_listener(lambda src, sel: calls.append("always"))
        service.set_selection(None, EMPTY_SELECTION)
        service.set_selection(None, EMPTY_SELECTION)
        assert calls == ["once", "always", "always"]
