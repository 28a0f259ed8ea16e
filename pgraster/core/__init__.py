"""Decoder configuration and error taxonomy.

Submodules:
    - config: Pydantic settings controlling decoder behavior.
    - errors: DecodeError and its fatal/non-fatal subclasses.
"""
