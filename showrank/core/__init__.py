"""
Core module - Ranking engine for showrank

This module contains the core functionality organized by concern:
- models: items, rating records, comparisons
- elo_ranking: adaptive-K rating updates
- ranking: graph inference, pair scoring and selection, anchors, completion
- session: sequential ranking of one pool with optimistic persistence
- store: JSON collection file used by the CLI
"""
