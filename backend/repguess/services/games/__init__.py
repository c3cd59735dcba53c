"""Game domain services: scoring, the round engine and timers.

This package contains the game mechanics proper and should be imported by
HTTP routes and socket handlers, keeping transport concerns separated
from the round state machine.
"""
