"""
Test suite for predmarket

Contains:
- tests/unit/          : Unit tests for individual modules and the engine facade
"""
