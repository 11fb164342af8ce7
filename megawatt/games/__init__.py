"""
Games module - Game-specific implementations.

Each game has its own subpackage with:
- Static data tables
- Game-specific state (board, players)
- Event reducer and command table
- A concrete engine built on engine_core
"""
