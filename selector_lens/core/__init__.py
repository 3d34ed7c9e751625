"""
Evaluation, position resolution, highlighting and live-testing core.
"""
