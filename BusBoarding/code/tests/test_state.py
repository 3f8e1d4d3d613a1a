from boarding.bookings import Booking
from boarding.ordering import derive_order
from boarding.state import BoardingState


def _upload(*bookings):
    bookings = list(bookings)
    return bookings, derive_order(bookings)


def test_commit_replaces_both_slots():
    state = BoardingState()
    token = state.begin_upload()
    bookings, order = _upload(Booking(id=1, seats=("A1",)), Booking(id=2, seats=("A9",)))
    assert state.commit(token, bookings, order, source_name="a.csv")
    assert [b.id for b in state.order] == [2, 1]
    assert [b.id for b in state.bookings] == [1, 2]
    assert state.source_name == "a.csv"


def test_stale_upload_is_discarded():
    state = BoardingState()
    old = state.begin_upload()
    new = state.begin_upload()
    assert new > old

    assert state.commit(new, *_upload(Booking(id=5, seats=("B2",))))
    assert not state.commit(old, *_upload(Booking(id=9, seats=("C3",))))
    assert [b.id for b in state.order] == [5]


def test_clear_resets_and_invalidates_pending_uploads():
    state = BoardingState()
    token = state.begin_upload()
    state.commit(token, *_upload(Booking(id=1, seats=("A1",))))
    pending = state.begin_upload()
    state.clear()
    assert state.order == [] and state.bookings == []
    assert not state.commit(pending, *_upload(Booking(id=2, seats=("A2",))))


def test_returned_lists_are_copies():
    state = BoardingState()
    token = state.begin_upload()
    state.commit(token, *_upload(Booking(id=1, seats=("A1",))))
    state.order.clear()
    assert len(state.order) == 1
