"""
Winglib Generator

Scaffolds independently publishable Wing libraries inside one repository,
together with their pull-request and release GitHub Actions workflows.
"""

__version__ = "0.1.0"

from winglib_generator.core.orchestrator import generate, generate_workspace
from winglib_generator.core.workspace import Workspace

__all__ = [
    "Workspace",
    "generate",
    "generate_workspace",
]
