import pytest

from prompt_refiner.session.loop import RefinementSession, SessionError
from prompt_refiner.session.store import SessionNotFoundError, SessionStore


def test_add_get_drop() -> None:
    store = SessionStore()
    session = store.add(RefinementSession("고양이 그림", "image", session_id="s1"))

    assert len(store) == 1
    assert store.get("s1") is session

    store.drop("s1")
    store.drop("s1")
    assert len(store) == 0


def test_missing_session_raises() -> None:
    store = SessionStore()

    with pytest.raises(SessionNotFoundError):
        store.get("nope")
    # callers may catch either family
    with pytest.raises(KeyError):
        store.get("nope")
    with pytest.raises(SessionError):
        store.get("nope")


def test_oldest_finished_sessions_are_evicted(dev_request: str) -> None:
    store = SessionStore(max_finished=2)
    for sid in ("a", "b", "c"):
        session = store.add(RefinementSession(dev_request, "dev", session_id=sid))
        session.start()
        session.finalize()
    open_session = store.add(RefinementSession(dev_request, "dev", session_id="open"))
    open_session.start()

    # "a" was the oldest finished one once a third finished session piled up
    with pytest.raises(SessionNotFoundError):
        store.get("a")
    assert store.get("b").stop_reason == "finalized_early"
    assert store.get("open") is open_session
    assert len(store) == 3


def test_unfinished_sessions_are_never_evicted(dev_request: str) -> None:
    store = SessionStore(max_finished=0)
    for sid in ("a", "b", "c"):
        store.add(RefinementSession(dev_request, "dev", session_id=sid)).start()

    assert len(store) == 3
