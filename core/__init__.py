"""core — Application shell and shared plumbing.

app         pygame window, scene stack, main loop
scene       Scene base class
tuning      data/tuning.toml loader
events      event dataclasses + EventBus
constants   screen size, fixed step, palette
"""
