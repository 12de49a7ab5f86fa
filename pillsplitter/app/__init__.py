"""Pointer interaction state machine and renderer view."""
