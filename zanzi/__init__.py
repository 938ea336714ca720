# (c) Copyright Datacraft, 2026
"""In-memory Zanzibar-style relationship engine."""
from .rebac import *  # noqa: F401,F403
from .rebac import __all__
