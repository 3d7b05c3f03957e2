"""
Guildhall - Card Game Rule Engine

A deterministic rule engine for a deck-building card game with guild piles,
tiered card powers and a worker-placement map. The engine provides:
- Immutable game state and a pure reducer
- Card effect text compiled to an effect AST
- A pending-effect protocol for choices and paid optional effects
- Map placement validation
- Legal action generation
"""

__version__ = "0.1.0"
