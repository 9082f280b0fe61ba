"""
Deterministic weight engine.

Pure Python math, no AI. Given a gate or window configuration, produce the
overall area, the material weight and the derived hardware quantities.
"""
