"""scenes — pygame screens: title menu, the plantation, game over.

The renderer (``scenes.draw``) and the on-screen touch pad live here
too; nothing under ``scenes`` is imported by the simulation.
"""
