"""Central place for contrast wheel default settings."""

# Canvas / wheel geometry
# Odd sizes put the wheel center exactly on a pixel center (saturation 0).
DEFAULT_CANVAS_SIZE: tuple[int, int] = (481, 481)
MIN_CANVAS_SIZE: int = 16
MAX_CANVAS_SIZE: int = 4096
WHEEL_INSET: float = 2.0  # Radius = min(w, h) / 2 - inset

# Initial colors
DEFAULT_BACKGROUND_HEX: str = "#fafafa"
DEFAULT_LIGHTNESS: float = 0.5

# WCAG guideline thresholds (AA large, AA normal, AAA normal)
GUIDELINE_THRESHOLDS: tuple[float, ...] = (3.0, 4.5, 7.0)
DEFAULT_ISOLINE_LEVELS: tuple[float, ...] = GUIDELINE_THRESHOLDS
MIN_VISIBLE_RATIO: float = 3.0  # Below this, pixels are painted as background

# Isoline darkening
ISOLINE_STRENGTH_MIN_LEVEL: float = 2.0
ISOLINE_STRENGTH_MAX_LEVEL: float = 12.0
ISOLINE_GRADED_STRENGTH: tuple[float, float] = (0.22, 0.85)
DEFAULT_GRADED_ISOLINES: bool = False

# Label anchors are kept inside this annulus (fractions of the radius)
LABEL_INNER_FRACTION: float = 0.25
LABEL_OUTER_FRACTION: float = 0.92

# Label box
LABEL_OFFSET_X: int = 8
LABEL_PAD_X: int = 4
LABEL_BOX_HEIGHT: int = 16
LABEL_FONT_SIZE: int = 12
LABEL_FILL_RGBA: tuple[int, int, int, int] = (255, 255, 255, 217)
LABEL_OUTLINE_RGBA: tuple[int, int, int, int] = (0, 0, 0, 64)
LABEL_TEXT_RGBA: tuple[int, int, int, int] = (0, 0, 0, 230)

# Selection marker
MARKER_RADIUS: float = 5.0
MARKER_LINE_WIDTH: int = 3
MARKER_RGBA: tuple[int, int, int, int] = (0, 0, 0, 255)

# Preview surfaces
PREVIEW_SANS_TEXT: str = "The quick brown fox jumps over the lazy dog."
PREVIEW_SERIF_TEXT: str = "Sphinx of black quartz, judge my vow."
