"""State logic package: one class per file.

This module re-exports state classes for convenient imports, e.g.:

    from .logic import ExploreScanningState, RetrieveGoalActiveState
"""

from .explore_dispatching import ExploreDispatchingState
from .explore_goal_active import ExploreGoalActiveState
from .explore_scanning import ExploreScanningState
from .retrieve_dispatching import RetrieveDispatchingState
from .retrieve_goal_active import RetrieveGoalActiveState

__all__ = [
    "ExploreDispatchingState",
    "ExploreGoalActiveState",
    "ExploreScanningState",
    "RetrieveDispatchingState",
    "RetrieveGoalActiveState",
]
