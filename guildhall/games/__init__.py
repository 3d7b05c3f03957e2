"""
Games module - Game-specific implementations.

Each game has its own subpackage with:
- Spec definition (catalog, map and rule constants)
- Card and map data
- Game setup
"""
