"""
dropfour - Connect Four rules engine

This package provides the grid model, move resolution, win and tie
detection and turn progression for Connect Four, plus a headless
gymnasium environment and a terminal interface that drive the engine.
"""

# Version number
__version__ = '0.1.0'
