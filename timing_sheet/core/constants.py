"""Grid size presets, input clamps, and canvas palette."""

# Frame size presets (pixels)
FRAME_WIDTH = {"small": 40, "normal": 60, "large": 80}
FRAME_HEIGHT = {"small": 5, "normal": 10, "large": 15}

# Input ranges enforced at the settings boundary
TOTAL_SECONDS_MIN = 1
TOTAL_SECONDS_MAX = 300
FPS_MIN = 1
FPS_MAX = 240
PREPARE_SECONDS_MIN = 0
PREPARE_SECONDS_MAX = 5

# Defaults
DEFAULT_TOTAL_SECONDS = 21
DEFAULT_FPS = 24
DEFAULT_PREPARE_SECONDS = 3
DEFAULT_FRAME_SIZE = "normal"
DEFAULT_CONTROLLER_HEIGHT = 80

# Layout
ROW_GAP = 30  # room for frame-number labels between rows
LEFT_MARGIN = 18  # room for second labels left of the first row
PLAYHEAD_OVERHANG = 10
TIME_LABEL_OFFSET = 70  # distance of the time readout from the bottom edge

# Canvas palette
BLOCK_FILL = "#cccccc"
BLOCK_BORDER = "#333333"
BLOCK_INNER_BORDER = "#666666"
FRAME_LINE = "#333333"
FRAME_LINE_MAJOR = "#000000"
FRAME_LABEL = "#999999"
SECOND_LABEL = "#cccccc"
MARK_FILL = "#ff00ff"
PLAYHEAD_PLAY = "#00ff00"
PLAYHEAD_RECORD = "#ff0000"

# Fonts
LABEL_FONT_SIZE = 11
FRAME_LABEL_FONT_SIZE = 7
TIME_FONT_SIZE = 11
