"""Sample application used by discovery tests."""
