"""simulation — The run-level state container and its tick driver.

Submodules
----------
context     SimContext (single owner of run state), level construction
snapshot    frozen read-only views handed to renderers and the HUD
sim         Simulation — start(), tick(inputs) -> Snapshot, confirm_harvest()
"""
