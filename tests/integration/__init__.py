"""
Integration Tests Package

Shared fixtures for the timeline test suite.

TEST AXIOMS:
=============
1. Determinism: "now" is always a fixed datetime
2. Explicit failure: dropped records and failed fetches are observable
"""
