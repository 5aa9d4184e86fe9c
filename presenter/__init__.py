"""
Presentation Buddy - scripted "live coding" playback.
"""

__version__ = "0.1.0"
