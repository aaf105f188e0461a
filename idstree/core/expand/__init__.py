"""Recursive, variant-aware expansion of IDS descriptions.

A character's description is looked up, parsed, and every character leaf in it is
replaced by that character's own expanded tree until only stroke leaves remain.
"""
