"""
Explorer/Follower mission coordinator.

An explorer robot visits configured lookup locations, spins in place until it
localizes the ArUco marker it can see, and records the marker position in the
map frame. Once every location has been visited a follower robot visits the
recorded marker positions in marker-id order and then returns home.

Modules:
    catalog        - Explorer waypoints and recorded marker locations
    marker         - Marker id hand-off, frame relay and map-frame resolution
    state_machine  - Mission states, shared context and state dispatch
    controller     - Nav2, cmd_vel and tf2 adapters (ROS 2 only)
    utils          - Mission parameters
"""

__version__ = '0.1.0'
