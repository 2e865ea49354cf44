"""
Models Module
=============

The Glicko-2 rating system, designed by Mark Glickman, and the helpers built on top of it.

- glicko2: the pairwise estimators g and E, the variance and delta estimators, the volatility solver,
  the single player rating updater and the array backed Glicko2 rating system.
- teams: score adjustment for multi sided contests and the roster updater which spreads a player's
  credit over simultaneous matches.
"""
