"""A vertical space shooter arcade game with levels, enemies and a leaderboard."""

__version__ = "1.0.0"