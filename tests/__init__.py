"""Tests - Test suite for the factorial circuit."""
