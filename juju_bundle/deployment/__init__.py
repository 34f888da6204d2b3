"""
Deployment and orchestration package.

This package contains modules for selecting, building, deploying, removing,
publishing and promoting the applications in a bundle.
"""

__all__ = ['bundle', 'selection', 'resolution', 'parallel', 'publish', 'promote', 'orchestrator', 'utils']
