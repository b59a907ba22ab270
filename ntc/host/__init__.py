"""
Boundary with the host environment: protocols of the external collaborators
and the file-backed document store.
"""

from .protocols import DocumentHandle, DocumentStore, Renderer, SettingsStore, TreeNode
from .vault import VaultFile, VaultStore

__all__ = [
    "DocumentHandle",
    "DocumentStore",
    "Renderer",
    "SettingsStore",
    "TreeNode",
    "VaultFile",
    "VaultStore",
]
