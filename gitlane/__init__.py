"""gitlane - interactive commit graph panel"""

__version__ = "0.1.0"
