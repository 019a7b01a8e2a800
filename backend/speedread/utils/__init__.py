"""
Utilities Module
Contains helper functions and algorithms.
"""
from speedread.utils.srs_algorithm import SRSAlgorithm, calculate_spaced_repetition
from speedread.utils.text_analysis import analyze_text

__all__ = ["SRSAlgorithm", "calculate_spaced_repetition", "analyze_text"]
