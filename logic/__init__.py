"""logic — Game systems package.

Top-level modules
-----------------
geometry        — distance, angle normalisation, cone containment
player          — player controller (movement, climbing, hiding)
guard           — guard AI state machine (patrol / scan / alert / chase)
detection       — flashlight visibility, suspicion meter, capture resolution
harvest         — oscillating-cursor harvest mini-game
particles       — VFX particle simulation
input_manager   — raw input → intent mapping
"""
