"""data — Tables shipped with the game (``tuning.toml``), read by ``core.tuning``."""
