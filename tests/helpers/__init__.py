"""Test helper utilities for talentmatch tests."""

from .factories import FIXTURES_DIR, load_fixture_candidates, make_candidate

__all__ = ["FIXTURES_DIR", "load_fixture_candidates", "make_candidate"]
