"""Pytest plugin and interpreter for declarative feature trees.

The `pytest_featuretree` package walks nested feature (group) and
scenario (test) definitions and declares them to a test runner.

Key features:
- fan-out of groups and scenarios over generated document fragments;
- conditional scenarios and inheritance of other components' tests;
- strict validation of node definitions with typed node variants;
- collection of feature modules as pytest tests.
"""
