"""Pytest configuration helpers.

Puts the project root on `sys.path` so tests can import the top-level modules
(`agents`, `domain`, `proposal_controller`, ...) regardless of how pytest is
invoked.
"""
import os
import sys


ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)
