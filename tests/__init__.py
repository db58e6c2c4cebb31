"""
Test suite for the P2P marketplace engine

Contains:
- tests/unit/          : Unit tests for individual modules and engine scenarios
"""
