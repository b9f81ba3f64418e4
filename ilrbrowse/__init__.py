"""
ILR Article Browser - Multilingual reading-practice article explorer

Loads per-language article datasets, filters them by topic and ILR
proficiency level, and pages through the results as cards.
"""

__version__ = "0.1.0"
