"""
Configuration for the floor planning engine.
"""

import os

# New floors
DEFAULT_FLOOR_X = 100.0
DEFAULT_FLOOR_Y = 100.0
DEFAULT_FLOOR_WIDTH = 400.0
DEFAULT_FLOOR_HEIGHT = 300.0

# Offsets applied to copies
DUPLICATE_OFFSET = 20.0
PASTE_OFFSET = 20.0

# Groups
GROUP_PADDING = 0.0

# Reservations
DEFAULT_PARTY_SIZE = 2
DEFAULT_CUSTOMER_NAME = "Guest"

# Run the membership/selection validators after every editor operation
DEBUG_INVARIANTS = os.environ.get("FLOORPLANNER_DEBUG", "").lower() in ("1", "true", "yes")

# Logging
LOG_LEVEL = os.environ.get("FLOORPLANNER_LOG_LEVEL", "WARNING")
