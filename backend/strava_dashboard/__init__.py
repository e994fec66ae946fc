"""
Strava Activity Dashboard backend.

Pulls one athlete's Strava history into a local JSON cache and serves
monthly/weekly aggregates to the dashboard frontend.
"""

__version__ = "0.1.0"
