"""Routing — template parsing, matching, extraction and building.

Templates are parsed when registered and compiled into anchored
patterns when the registry freezes.
"""
