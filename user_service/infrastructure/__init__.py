"""Infrastructure — record store gateway and logging setup.

Invariants:
    - Only layer that talks to the database driver
"""
