"""
SpeedRead vocabulary backend.
Readability analysis and spaced repetition vocabulary review.
"""
