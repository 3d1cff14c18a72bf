"""
Centralized constants for gitlane.

Defaults that are also exposed through settings live here so the backend
does not need a Settings instance to work.
"""

# Sentinel file written into a repository once the panel tracks it
DEFAULT_MARKER_FILE = ".gitlane"

# Host <-> panel message commands
CHECKOUT_COMMAND = "checkout"
CHECKOUT_RESULT_COMMAND = "checkoutResult"

# Graph geometry (scene units)
DEFAULT_BASE_X = 210
DEFAULT_BASE_Y = 50
DEFAULT_LANE_WIDTH = 100
DEFAULT_ROW_HEIGHT = 100
DEFAULT_TEXT_WIDTH = 500
DEFAULT_NODE_RADIUS = 7
