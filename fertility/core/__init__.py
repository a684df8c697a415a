"""
Core evaluation pipeline: normalization, factor evaluation, interactions,
reporting and treatment suggestions.
"""
