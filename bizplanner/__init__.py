"""
Business Planner core.

Data access (bizplanner.data), derivation helpers (bizplanner.views),
page controllers (bizplanner.pages) and the read-only dashboard and
progress views (bizplanner.dashboard).
"""

__version__ = "1.0.0"
