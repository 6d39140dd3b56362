"""
Quiz Funnel Core

Scoring, result aggregation, insights, projection, pricing tiers and the
post-quiz screen sequence for the stress quiz funnel.
"""

__version__ = "1.4.0"
