import logging
from typing import Dict, List, Optional, Sequence, Tuple

import pytest

from explorer_follower.catalog import TargetCatalog
from explorer_follower.exceptions import TransformUnavailableError
from explorer_follower.marker import Detection, FrameRelay, FrameTransform, LocationResolver
from explorer_follower.state_machine import MissionContext, MissionManager, MissionState, NavStatus
from explorer_follower.utils import MissionParams


class FakeClock:
    def __init__(self, start: float = 100.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeNode:
    def __init__(self, name: str = "explorer_follower_test") -> None:
        self._logger = logging.getLogger(name)

    def get_logger(self) -> logging.Logger:
        return self._logger


class FakeRobot:
    """Records goals and velocity commands; goal status is set by the test."""

    def __init__(self, name: str) -> None:
        self.name = name
        self.goals: List[Tuple[float, float]] = []
        self.velocities: List[Tuple[float, float]] = []
        self.status = NavStatus.IDLE

    def send_goal(self, x: float, y: float) -> None:
        self.goals.append((x, y))
        self.status = NavStatus.PENDING

    def goal_status(self) -> NavStatus:
        return self.status

    def succeed(self) -> None:
        self.status = NavStatus.SUCCEEDED

    def fail(self, status: NavStatus = NavStatus.ABORTED) -> None:
        self.status = status

    def publish_velocity(self, linear: float = 0.0, angular: float = 0.0) -> None:
        self.velocities.append((linear, angular))

    def rotate(self, angular_speed: float) -> None:
        self.publish_velocity(0.0, angular_speed)

    def stop(self) -> None:
        self.publish_velocity(0.0, 0.0)


class FakeTransformStore:
    """
    Minimal tf stand-in.

    Every send gets a new integer stamp. A sent frame becomes visible at the
    map position placed for it beforehand; with `delay_delivery` set, sends
    wait in `in_flight` until deliver_in_flight(), and lookups keep answering
    with whatever was visible before, like a tf buffer fed over /tf.
    """

    def __init__(self) -> None:
        self.published: List[FrameTransform] = []
        self.placed: Dict[str, Tuple[float, float]] = {}
        self.visible: Dict[str, Tuple[float, float, int]] = {}
        self.in_flight: List[Tuple[str, int]] = []
        self.delay_delivery = False
        self.stamp = 0
        self.lookup_calls = 0
        self.failures_remaining = 0

    def send_transforms(self, transforms: Sequence[FrameTransform]) -> int:
        self.stamp += 1
        self.published.extend(transforms)
        batch = [(t.child_frame, self.stamp) for t in transforms]
        if self.delay_delivery:
            self.in_flight.extend(batch)
        else:
            self._deliver(batch)
        return self.stamp

    def deliver_in_flight(self) -> None:
        self._deliver(self.in_flight)
        self.in_flight = []

    def _deliver(self, batch: List[Tuple[str, int]]) -> None:
        for frame, stamp in batch:
            if frame in self.placed:
                x, y = self.placed[frame]
                self.visible[frame] = (x, y, stamp)

    def place(self, frame: str, x: float, y: float) -> None:
        """Map position `frame` will resolve to once it is next sent."""
        self.placed[frame] = (x, y)

    def fail_next(self, count: int) -> None:
        self.failures_remaining = count

    def lookup_planar(self, target_frame: str, source_frame: str,
                      not_before: Optional[int] = None) -> Tuple[float, float]:
        self.lookup_calls += 1
        if self.failures_remaining > 0:
            self.failures_remaining -= 1
            raise TransformUnavailableError(
                f'"{source_frame}" passed to lookupTransform argument source_frame '
                "does not exist."
            )
        if source_frame not in self.visible:
            raise TransformUnavailableError(f"{target_frame} -> {source_frame} not available")
        x, y, stamp = self.visible[source_frame]
        if not_before is not None and stamp < not_before:
            raise TransformUnavailableError(f"{target_frame} -> {source_frame} is stale")
        return (x, y)


class MissionHarness:
    """Wires the real core components to fakes and steps the state machine."""

    FOLLOWER_HOME = (-4.0, 3.5)

    def __init__(
        self,
        waypoints: Sequence[Tuple[float, float]],
        goal_retry_limit: int = 3,
        explorer_return_home: bool = False,
    ) -> None:
        self.clock = FakeClock()
        self.node = FakeNode()
        self.explorer = FakeRobot("explorer")
        self.follower = FakeRobot("follower")
        self.tf = FakeTransformStore()
        self.params = MissionParams(
            explorer_targets=tuple(waypoints),
            follower_home=self.FOLLOWER_HOME,
            goal_retry_limit=goal_retry_limit,
            explorer_return_home=explorer_return_home,
        )
        self.catalog = TargetCatalog(waypoints, self.params.explorer_home, self.node.get_logger())
        self.context = MissionContext()
        self.relay = FrameRelay(
            self.tf,
            self.context.marker_channel,
            camera_frame=self.params.camera_frame,
            marker_frame=self.params.marker_frame,
            secondary_frame=self.params.secondary_frame,
            logger=self.node.get_logger(),
            is_valid_marker_id=self.catalog.is_valid_marker_id,
        )
        self.resolver = LocationResolver(
            self.tf,
            self.catalog,
            self.context.marker_channel,
            logger=self.node.get_logger(),
            source_frame=self.params.secondary_frame,
            retry_interval=self.params.lookup_retry_interval,
            clock=self.clock,
        )
        self.manager = MissionManager(
            self.node,
            self.explorer,
            self.follower,
            self.catalog,
            self.resolver,
            self.params,
            context=self.context,
        )
        self.state = MissionManager.INITIAL_STATE
        self.transitions: List[MissionState] = []

    def tick(self, count: int = 1) -> MissionState:
        for _ in range(count):
            new_state = self.manager.execute_state(self.state)
            if new_state is not None and new_state != self.state:
                self.transitions.append(new_state)
                self.state = new_state
            self.clock.advance(0.125)
        return self.state

    def observe(self, marker_id: int, x: float, y: float,
                extra: Optional[Sequence[Detection]] = None) -> None:
        """Marker `marker_id` comes into view; its offset frame sits at (x, y) in map."""
        detections = [Detection(marker_id, (0.1, 0.0, 1.2), (0.0, 0.0, 0.0, 1.0))]
        detections.extend(extra or [])
        self.tf.place(self.params.secondary_frame, x, y)
        self.relay.handle_observation(detections)

    def explore_waypoint(self, marker_id: int, x: float, y: float) -> None:
        """Drive one dispatch -> arrive -> scan -> localize cycle."""
        assert self.tick() == MissionState.EXPLORE_GOAL_ACTIVE
        self.tick()
        self.explorer.succeed()
        assert self.tick() == MissionState.EXPLORE_SCANNING
        self.tick()
        self.observe(marker_id, x, y)
        self.tick()


@pytest.fixture
def logger() -> logging.Logger:
    return logging.getLogger("explorer_follower_test")


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def transform_store() -> FakeTransformStore:
    return FakeTransformStore()


@pytest.fixture
def four_waypoints() -> List[Tuple[float, float]]:
    return [(1.0, 1.0), (2.0, 2.0), (3.0, 3.0), (4.0, 4.0)]


@pytest.fixture
def harness(four_waypoints) -> MissionHarness:
    return MissionHarness(four_waypoints)
