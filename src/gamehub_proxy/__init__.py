"""
GameHub API Proxy - routeur HTTP entre l'application mobile et ses upstreams.
"""

__version__ = "1.0.0"
