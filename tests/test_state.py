from conftest import make_trip

from app.api.models.schemas import ActivityPatch, TripActivity, TripDay
from app.domain.models import HistoryState


def test_set_trip_persists_before_holding(trip_state, repo):
    trip = make_trip("a", "2025-01-01T00:00:00.000Z")
    trip_state.set_error("old error")

    trip_state.set_trip(trip)

    assert trip_state.current_trip == trip
    assert trip_state.error is None
    assert repo.read_all() == [trip]


def test_update_activity_merges_and_writes_through(trip_state, repo):
    trip = make_trip("a", "2025-01-01T00:00:00.000Z")
    trip_state.set_trip(trip)

    updated = trip_state.update_activity(1, 0, ActivityPatch(cost="₹500", description="Brunch"))

    assert updated.id == trip.id
    assert updated.createdAt == trip.createdAt
    activity = updated.days[0].activities[0]
    assert (activity.cost, activity.description, activity.place) == ("₹500", "Brunch", "Cafe")
    assert updated.days[0].activities[1] == trip.days[0].activities[1]
    # the original value is untouched
    assert trip.days[0].activities[0].cost == "₹200–400"
    assert repo.read_all() == [updated]
    assert len(repo.read_all()) == 1


def test_update_activity_backfills_cleared_map_query(trip_state):
    trip_state.set_trip(make_trip("a", "2025-01-01T00:00:00.000Z"))

    updated = trip_state.update_activity(1, 1, ActivityPatch(place="Old Fort", mapQuery=""))

    assert updated.days[0].activities[1].mapQuery == "Old Fort"


def test_replace_day(trip_state, repo):
    trip_state.set_trip(make_trip("a", "2025-01-01T00:00:00.000Z"))
    new_day = TripDay(
        day=2,
        title="Day 2: Beach",
        activities=[TripActivity(time="07:00", place="Beach", description="", cost="₹0")],
    )

    updated = trip_state.replace_day(2, new_day)

    assert updated.days[1] == new_day
    assert updated.days[1].activities[0].mapQuery == "Beach"
    assert repo.latest().days[1] == new_day


def test_edits_without_trip_are_noops(trip_state, repo):
    assert trip_state.update_activity(1, 0, ActivityPatch(cost="₹1")) is None
    assert trip_state.replace_day(1, TripDay(day=1, title="x")) is None
    assert repo.read_all() == []


def test_add_trip_to_top_moves_existing_entry():
    history = HistoryState()
    a, b, c = (make_trip(i, f"2025-01-0{n}T00:00:00.000Z") for n, i in enumerate("abc", start=1))
    history.set_initial_page([c, b, a], "cursor")

    renamed = b.model_copy(update={"tripTitle": "Renamed"})
    history.add_trip_to_top(renamed)

    assert [t.id for t in history.trips] == ["b", "c", "a"]
    assert history.trips[0].tripTitle == "Renamed"
    assert len(history.trips) == 3

    history.add_trip_to_top(make_trip("d", "2025-01-04T00:00:00.000Z"))
    assert [t.id for t in history.trips] == ["d", "b", "c", "a"]


def test_history_pages_and_reset():
    history = HistoryState()
    history.set_initial_page([make_trip("a", "2025-01-02T00:00:00.000Z")], "2025-01-02T00:00:00.000Z")
    assert history.has_more and history.initialized

    history.append_page([make_trip("b", "2025-01-01T00:00:00.000Z")], None)
    assert [t.id for t in history.trips] == ["a", "b"]
    assert history.has_more is False

    history.reset_history()
    assert history.to_view().model_dump() == {"trips": [], "hasMore": True, "nextCursor": None, "isFetching": False}
    assert history.initialized is False


def test_update_activity_null_photo_spot_clears_it(trip_state):
    trip_state.set_trip(make_trip("a", "2025-01-01T00:00:00.000Z"))
    flagged = trip_state.update_activity(1, 0, ActivityPatch(photoSpot=True))
    assert flagged.days[0].activities[0].photoSpot is True

    cleared = trip_state.update_activity(1, 0, ActivityPatch.model_validate({"photoSpot": None, "cost": None}))

    activity = cleared.days[0].activities[0]
    assert activity.photoSpot is None
    assert activity.cost == "₹200–400"
