"""Pytest fixtures for vimsearch tests."""

from tests.fixtures.editor import *
