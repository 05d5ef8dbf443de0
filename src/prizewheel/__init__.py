"""
Prize wheel - an animated spin-to-win wheel with a scripted outcome.
"""

__version__ = "0.1.0"
