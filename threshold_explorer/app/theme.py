"""Light panel theme constants for the Dash app."""

BACKGROUND = "#FFFFFF"
PANEL_BG = "#F5F5F5"   # sidebar panels
BORDER = "#CCCCCC"
TEXT = "#333333"
MUTED = "#93A1A1"

REFERENCE_LINE = "#0066CC"  # threshold crosshair
HOVER_LINE = "#666666"      # pointer spikes

ERROR = "#DC322F"

FONT_STACK = '"Helvetica Neue", Arial, sans-serif'

SIDEBAR_WIDTH = "300px"
