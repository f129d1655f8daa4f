"""Theme and style constants for the GUI.

This module defines the visual styling constants used throughout the application.
All GUI components should reference these constants to maintain consistent styling.

Constants:
    COLORS: Color palette for buttons, text, and UI elements
    FONTS: Font family, size, and weight configurations
    PADDING: Spacing values for margins and padding
    WINDOW_SIZES: Default and minimum window dimensions
    FADE: Step count and interval of the window fade animations
"""

# Color palette - semantic color names for consistent theming
COLORS = {
    "primary": "#1f538d",        # Main action buttons (blue)
    "primary_hover": "#14375e",  # Primary button hover state
    "success": "#2d8a4e",        # Save/confirm actions (green)
    "success_hover": "#1e5c34",  # Success button hover state
    "danger": "#dc3545",         # Destructive actions (red)
    "danger_hover": "#a71d2a",   # Danger button hover state
    "muted": "#6c757d",          # Descriptions, secondary text (gray)
}

# Font configurations - tuple format: (family, size, weight)
FONTS = {
    "title": ("Segoe UI", 18, "bold"),   # Window titles
    "heading": ("Segoe UI", 14, "bold"), # Section headers, patch names
    "body": ("Segoe UI", 12),            # Standard body text
    "small": ("Segoe UI", 10),           # Patch descriptions, status text
}

# Padding and spacing values in pixels
PADDING = {
    "small": 10,
    "medium": 18,
    "large": 30,
}

# Window sizes - tuple format: (width, height)
WINDOW_SIZES = {
    "main": (760, 520),
    "min_main": (600, 400),
    "config_dialog": (700, 420),
    "edit_patch": (620, 560),
    "installed_content": (640, 520),
    "updater": (420, 140),
}

# Fade animation: opacity goes 0 -> 1 (or back) in STEPS steps
FADE = {
    "steps": 10,
    "interval_ms": 15,
}
