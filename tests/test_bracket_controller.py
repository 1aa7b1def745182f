from classbracket.config import LayoutConfig
from classbracket.controllers import BracketController, MatchRecorder
from classbracket.store import InMemoryStore


class _Listener:
    def __init__(self):
        self.layouts = []

    def __call__(self, layout, students, matches):
        self.layouts.append(layout)


def test_start_delivers_first_layout_at_once():
    store = InMemoryStore()
    store.add_student("Alice")
    listener = _Listener()

    BracketController(store, listener).start()

    assert len(listener.layouts) == 1
    assert [node.name for node in listener.layouts[0].nodes] == ["Alice"]


def test_every_change_recomputes_the_layout():
    store = InMemoryStore()
    listener = _Listener()
    controller = BracketController(store, listener)
    controller.start()

    alice = store.add_student("Alice")
    bob = store.add_student("Bob")
    MatchRecorder(store).record_match_with_winner(alice.id, bob.id, "player1")

    latest = listener.layouts[-1]
    assert latest is controller.layout
    assert latest.tiers == {0: (bob.id,), 1: (alice.id,)}
    assert len(latest.edges) == 1
    # Earlier layouts are never modified in place
    assert listener.layouts[0].is_empty


def test_start_twice_subscribes_once_and_stop_is_idempotent():
    store = InMemoryStore()
    controller = BracketController(store, _Listener())

    controller.start()
    controller.start()
    assert store.subscriber_count == 1
    assert controller.is_running

    controller.stop()
    controller.stop()
    assert store.subscriber_count == 0
    assert not controller.is_running


def test_no_layouts_after_stop():
    store = InMemoryStore()
    listener = _Listener()
    controller = BracketController(store, listener)
    controller.start()
    controller.stop()

    store.add_student("Alice")

    assert len(listener.layouts) == 1


def test_refresh_uses_configured_geometry():
    store = InMemoryStore()
    store.add_student("Alice")
    config = LayoutConfig(center_x=0, center_y=0, base_radius=10)
    listener = _Listener()

    layout = BracketController(store, listener, config).refresh()

    (node,) = layout.nodes
    assert node.radius == 10
    assert listener.layouts == [layout]
