"""Shared utilities for bifslide."""
