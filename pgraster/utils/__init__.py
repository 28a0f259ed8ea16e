"""Low-level helpers shared by the codec modules."""
