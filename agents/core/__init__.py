"""
Core interfaces and contracts for the agents system.
"""

from agents.core.interfaces import (
    ICredentialProvider,
    IDeckRepository,
    IImageProvider,
    IIconProvider,
)

__all__ = ["ICredentialProvider", "IDeckRepository", "IImageProvider", "IIconProvider"]
