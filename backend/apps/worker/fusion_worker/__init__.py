"""
Fusion Worker.

Background feed puller running on arq.
"""

__version__ = "0.1.0"
