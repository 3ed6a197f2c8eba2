"""
Morris - Nine Men's Morris Engine

A rules engine and computer opponent for nine men's morris.
The package provides:
- Board state with in-place, undoable moves
- Legal move generation for placing, moving and removing
- A heuristic rating of positions
- Bot policies up to an alpha-beta search
- A match loop with draw detection and a terminal CLI
"""

__version__ = "0.1.0"
