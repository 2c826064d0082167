"""
DeSyDe Test Suite

Unit tests for run configuration, optimization step sequencing, and the
presolver hand-off.
"""
