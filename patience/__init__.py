"""
Patience - Klondike-style solitaire engine

A deterministic, rules-driven engine for a single-player patience game.
It provides:
- State management for the draw pile, reserve, lanes and suit piles
- Move validation and atomic move application with scoring
- Oscillation detection for repeated lane moves
- A command interpreter, a terminal loop and an HTTP API
"""

__version__ = "0.1.0"
