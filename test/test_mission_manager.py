import logging

import pytest

from conftest import MissionHarness
from explorer_follower.exceptions import UnsetLocationError
from explorer_follower.marker import Detection
from explorer_follower.state_machine import MissionPhase, MissionState, NavStatus

MARKERS = [(0, 1.1, 1.1), (1, 2.1, 2.1), (2, 3.1, 3.1), (3, 4.1, 4.1)]


def _explore_all(harness: MissionHarness) -> None:
    for marker_id, x, y in MARKERS:
        harness.explore_waypoint(marker_id, x, y)


def _retrieve_all(harness: MissionHarness) -> None:
    for _ in range(harness.catalog.waypoint_count):
        assert harness.tick() == MissionState.RETRIEVE_GOAL_ACTIVE
        harness.tick()
        harness.follower.succeed()
        harness.tick()


def test_four_waypoint_mission_end_to_end(harness: MissionHarness, caplog) -> None:
    with caplog.at_level(logging.INFO):
        _explore_all(harness)
        assert harness.state == MissionState.RETRIEVE_AWAITING_DISPATCH
        _retrieve_all(harness)

    assert harness.explorer.goals == [(1.0, 1.0), (2.0, 2.0), (3.0, 3.0), (4.0, 4.0)]
    assert harness.follower.goals == [
        (1.1, 1.1),
        (2.1, 2.1),
        (3.1, 3.1),
        (4.1, 4.1),
        (-4.0, 3.5),
    ]
    assert harness.state == MissionState.DONE
    assert harness.context.explorer_index == 3
    assert harness.context.follower_index == 4
    assert "EXPLORER JOB DONE!" in caplog.text
    assert "MISSION FINISHED!" in caplog.text


def test_explorer_goals_wait_for_success_and_localization(harness: MissionHarness) -> None:
    harness.tick()
    harness.tick(5)
    assert harness.explorer.goals == [(1.0, 1.0)]
    assert harness.state == MissionState.EXPLORE_GOAL_ACTIVE

    harness.explorer.succeed()
    harness.tick(10)
    # Arrived but nothing localized yet: keep scanning, no new goal
    assert harness.state == MissionState.EXPLORE_SCANNING
    assert harness.explorer.goals == [(1.0, 1.0)]
    # Rotation is re-commanded on every tick spent waiting
    assert harness.explorer.velocities == [(0.0, 0.1)] * 10

    harness.observe(0, 1.1, 1.1)
    harness.tick()
    assert harness.state == MissionState.EXPLORE_AWAITING_DISPATCH
    assert harness.explorer.velocities == [(0.0, 0.1)] * 10 + [(0.0, 0.0)]

    harness.tick()
    assert harness.explorer.goals == [(1.0, 1.0), (2.0, 2.0)]
    assert harness.context.explorer_index == 1


def test_follower_goals_wait_for_success(harness: MissionHarness) -> None:
    _explore_all(harness)

    harness.tick()
    harness.tick(5)
    assert harness.follower.goals == [(1.1, 1.1)]

    harness.follower.status = NavStatus.ACTIVE
    harness.tick(5)
    assert harness.follower.goals == [(1.1, 1.1)]
    assert harness.state == MissionState.RETRIEVE_GOAL_ACTIVE


def test_phase_transition_happens_once_and_appends_home(harness: MissionHarness) -> None:
    _explore_all(harness)
    _retrieve_all(harness)

    phases = [MissionPhase.EXPLORING] + [state.phase for state in harness.transitions]
    handoffs = [
        (before, after) for before, after in zip(phases, phases[1:])
        if before != after
    ]
    assert handoffs == [
        (MissionPhase.EXPLORING, MissionPhase.RETRIEVING),
        (MissionPhase.RETRIEVING, MissionPhase.FINISHED),
    ]
    assert harness.catalog.marker_location(harness.catalog.home_slot).position == (-4.0, 3.5)


def test_no_transition_before_last_waypoint_is_scanned(harness: MissionHarness) -> None:
    for marker_id, x, y in MARKERS[:3]:
        harness.explore_waypoint(marker_id, x, y)

    harness.tick()
    harness.explorer.succeed()
    harness.tick(10)

    assert harness.state == MissionState.EXPLORE_SCANNING
    assert harness.context.explorer_index == 3
    assert not harness.catalog.has_location(harness.catalog.home_slot)
    assert harness.follower.goals == []


def test_follower_visits_slots_in_marker_id_order(four_waypoints) -> None:
    harness = MissionHarness(four_waypoints)
    # Markers are discovered out of id order
    for marker_id, x, y in [(2, 1.1, 1.1), (0, 2.1, 2.1), (3, 3.1, 3.1), (1, 4.1, 4.1)]:
        harness.explore_waypoint(marker_id, x, y)
    _retrieve_all(harness)

    assert harness.follower.goals == [
        (2.1, 2.1),
        (4.1, 4.1),
        (1.1, 1.1),
        (3.1, 3.1),
        (-4.0, 3.5),
    ]


def test_already_localized_marker_keeps_explorer_scanning(harness: MissionHarness) -> None:
    harness.explore_waypoint(0, 1.1, 1.1)

    harness.tick()
    harness.explorer.succeed()
    harness.tick()
    # Marker 0 is still in view from the second waypoint
    harness.observe(0, 1.4, 1.4)
    harness.tick(3)
    assert harness.state == MissionState.EXPLORE_SCANNING
    assert harness.catalog.marker_location(0).position == (1.1, 1.1)

    harness.observe(1, 2.1, 2.1)
    harness.tick()
    assert harness.state == MissionState.EXPLORE_AWAITING_DISPATCH
    assert harness.catalog.marker_location(1).position == (2.1, 2.1)


def test_lookup_failures_back_off_without_changing_status(harness: MissionHarness) -> None:
    harness.tick()
    harness.explorer.succeed()
    harness.tick()
    harness.tf.fail_next(3)
    harness.observe(0, 1.1, 1.1)

    ticks = 0
    while harness.state == MissionState.EXPLORE_SCANNING and ticks < 60:
        assert harness.catalog.recorded_count() == 0
        assert harness.context.marker_channel.peek() == 0
        harness.tick()
        ticks += 1

    assert harness.state == MissionState.EXPLORE_AWAITING_DISPATCH
    assert harness.tf.lookup_calls == 4
    # Three one-second backoffs at eight ticks per second
    assert ticks == 25
    assert harness.catalog.marker_location(0).position == (1.1, 1.1)


def test_previous_marker_frame_does_not_complete_next_scan(harness: MissionHarness) -> None:
    harness.explore_waypoint(0, 1.1, 1.1)
    harness.tick()
    harness.explorer.succeed()
    assert harness.tick() == MissionState.EXPLORE_SCANNING

    # Marker 1's frames are sent but not yet delivered to the store
    harness.tf.delay_delivery = True
    harness.observe(1, 2.1, 2.1)
    harness.tick()

    assert harness.state == MissionState.EXPLORE_SCANNING
    assert not harness.catalog.has_location(1)

    harness.tf.deliver_in_flight()
    harness.tick(8)

    assert harness.state == MissionState.EXPLORE_AWAITING_DISPATCH
    assert harness.catalog.marker_location(1).position == (2.1, 2.1)
    assert harness.catalog.marker_location(0).position == (1.1, 1.1)


def test_second_detection_in_batch_is_discarded(harness: MissionHarness) -> None:
    harness.tick()
    harness.explorer.succeed()
    harness.tick()
    harness.observe(1, 1.1, 1.1, extra=[Detection(0, (0.0, 0.0, 3.0))])
    harness.tick()

    assert harness.catalog.has_location(1)
    assert not harness.catalog.has_location(0)


def test_failed_goal_is_resent_without_advancing_index(harness: MissionHarness) -> None:
    harness.tick()
    harness.explorer.fail(NavStatus.ABORTED)
    harness.tick()

    assert harness.state == MissionState.EXPLORE_GOAL_ACTIVE
    assert harness.explorer.goals == [(1.0, 1.0), (1.0, 1.0)]
    assert harness.context.explorer_index == 0
    assert harness.context.goal_retries == 1

    harness.explorer.succeed()
    harness.tick()
    assert harness.state == MissionState.EXPLORE_SCANNING


def test_goal_failures_past_retry_limit_abort_mission(four_waypoints) -> None:
    harness = MissionHarness(four_waypoints, goal_retry_limit=2)
    harness.tick()

    for status in (NavStatus.ABORTED, NavStatus.REJECTED, NavStatus.CANCELED):
        harness.explorer.fail(status)
        harness.tick()

    assert harness.state == MissionState.ABORTED
    assert harness.state.is_terminal
    assert len(harness.explorer.goals) == 3
    assert harness.explorer.velocities[-1] == (0.0, 0.0)

    harness.tick(5)
    assert harness.state == MissionState.ABORTED
    assert len(harness.explorer.goals) == 3


def test_follower_goal_failure_is_retried(harness: MissionHarness) -> None:
    _explore_all(harness)
    harness.tick()
    harness.follower.fail(NavStatus.ABORTED)
    harness.tick()

    assert harness.follower.goals == [(1.1, 1.1), (1.1, 1.1)]
    assert harness.context.follower_index == 0


def test_explorer_parks_at_home_when_enabled(four_waypoints) -> None:
    harness = MissionHarness(four_waypoints, explorer_return_home=True)

    _explore_all(harness)

    assert harness.explorer.goals[-1] == (-4.0, 2.5)
    assert harness.context.explorer_index == 3


def test_retrieving_an_unset_slot_fails_fast(harness: MissionHarness) -> None:
    harness.state = MissionState.RETRIEVE_AWAITING_DISPATCH

    with pytest.raises(UnsetLocationError):
        harness.tick()
    assert harness.follower.goals == []


def test_terminal_states_have_no_handler(harness: MissionHarness) -> None:
    assert harness.manager.execute_state(MissionState.DONE) is None
    assert harness.manager.execute_state(MissionState.ABORTED) is None


@pytest.mark.parametrize(
    "state, phase",
    [
        (MissionState.EXPLORE_AWAITING_DISPATCH, MissionPhase.EXPLORING),
        (MissionState.EXPLORE_GOAL_ACTIVE, MissionPhase.EXPLORING),
        (MissionState.EXPLORE_SCANNING, MissionPhase.EXPLORING),
        (MissionState.RETRIEVE_AWAITING_DISPATCH, MissionPhase.RETRIEVING),
        (MissionState.RETRIEVE_GOAL_ACTIVE, MissionPhase.RETRIEVING),
        (MissionState.DONE, MissionPhase.FINISHED),
        (MissionState.ABORTED, MissionPhase.FINISHED),
    ],
)
def test_every_state_belongs_to_one_phase(state: MissionState, phase: MissionPhase) -> None:
    assert state.phase == phase
