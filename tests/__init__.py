"""Test suite for the pytest-featuretree package.

This package contains unit and integration tests validating node
construction, tree walking, declaration recording, pytest integration
and command-line utilities.
"""
