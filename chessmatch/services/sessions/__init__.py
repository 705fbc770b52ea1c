"""Session domain services: store, matchmaking and in-game coordination.

This package holds the session state machine and talks to the realtime
layer only through a small transport object, keeping Socket.IO concerns
out of the core matchmaking and turn logic.
"""
