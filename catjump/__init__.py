"""
catjump: a single-screen arcade game with procedurally generated pipes.
"""

__version__ = "0.1.0"
