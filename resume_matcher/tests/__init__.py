"""Tests for the resume_matcher package."""
