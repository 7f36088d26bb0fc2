#!/usr/bin/env python3
"""Mission state definitions for the explorer/follower mission."""
from enum import Enum, auto


class MissionPhase(Enum):
    """Top-level mission stages, passed through once and in order."""
    EXPLORING = 0
    RETRIEVING = 1
    FINISHED = 2


class MissionState(Enum):
    """Defines the operational states of the mission coordinator."""
    EXPLORE_AWAITING_DISPATCH = 0
    EXPLORE_GOAL_ACTIVE = 1
    EXPLORE_SCANNING = 2
    RETRIEVE_AWAITING_DISPATCH = 3
    RETRIEVE_GOAL_ACTIVE = 4
    DONE = 5
    ABORTED = 6

    @property
    def phase(self) -> MissionPhase:
        if self in (MissionState.DONE, MissionState.ABORTED):
            return MissionPhase.FINISHED
        if self.name.startswith('EXPLORE_'):
            return MissionPhase.EXPLORING
        return MissionPhase.RETRIEVING

    @property
    def is_terminal(self) -> bool:
        return self.phase is MissionPhase.FINISHED


class NavStatus(Enum):
    """Status of the current navigation goal, polled once per tick."""
    IDLE = auto()
    PENDING = auto()
    ACTIVE = auto()
    SUCCEEDED = auto()
    ABORTED = auto()
    CANCELED = auto()
    REJECTED = auto()

    @property
    def is_failure(self) -> bool:
        return self in (NavStatus.ABORTED, NavStatus.CANCELED, NavStatus.REJECTED)
