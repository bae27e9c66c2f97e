"""
Constants for Chartboard.

Centralises dataset column names, category vocabularies, colour
palettes, font families, timing values and export settings.
"""

# ── Dataset files (names expected by "Load Folder") ─────────────────────
DATASET_CARS = "cars"
DATASET_FINANCIAL = "financial"
DATASET_MENTAL_HEALTH = "mental_health"

DATASET_FILENAMES = {
    DATASET_CARS: "car_prices_subset.csv",
    DATASET_FINANCIAL: "financial_risk_assessment.csv",
    DATASET_MENTAL_HEALTH: "Student_Mental_health.csv",
}

DATASET_LABELS = {
    DATASET_CARS: "Used-car sales",
    DATASET_FINANCIAL: "Financial risk",
    DATASET_MENTAL_HEALTH: "Student mental health",
}

# ── Column names (matched by header string) ─────────────────────────────
COL_YEAR = "year"
COL_MAKE = "make"
COL_BODY = "body"
COL_TRANSMISSION = "transmission"
COL_CONDITION = "condition"
COL_ODOMETER = "odometer"
COL_COLOR = "color"
COL_SELLING_PRICE = "sellingprice"

COL_EDUCATION = "Education Level"
COL_RISK_RATING = "Risk Rating"
COL_LOAN_AMOUNT = "Loan Amount"
COL_CREDIT_SCORE = "Credit Score"
COL_INCOME = "Income"

COL_DEPRESSION = "Do you have Depression?"
COL_ANXIETY = "Do you have Anxiety?"
COL_PANIC_ATTACK = "Do you have Panic attack?"
COL_TREATMENT = "Did you seek any specialist for a treatment?"
COL_CGPA = "What is your CGPA?"

# ── Category vocabularies ───────────────────────────────────────────────
# Canonical car colours.  Raw spellings outside this set are admitted
# only when COLOR_SYNONYMS maps them onto it.
COLOR_CANONICAL = (
    "white", "black", "red", "silver", "blue", "brown",
    "purple", "yellow", "green", "orange", "pink",
)

COLOR_SYNONYMS = {
    "gray": "silver",
    "charcoal": "black",
    "off-white": "white",
    "burgundy": "red",
    "turquoise": "blue",
    "lime": "green",
    "beige": "white",
    "gold": "yellow",
}

TRANSMISSIONS = ("manual", "automatic")
EDUCATION_LEVELS = ("PhD", "Master's", "Bachelor's", "High School")
RISK_RATINGS = ("Low", "Medium", "High")
YES_NO = ("Yes", "No")
CGPA_BANDS = (
    "0 - 1.99", "2.00 - 2.49", "2.50 - 2.99", "3.00 - 3.49", "3.50 - 4.00",
)

# ── Chart parameters ─────────────────────────────────────────────────────
HISTOGRAM_BINS = 20
QUANTILE_BUCKETS = 20
SCATTER_PADDING = 0.1
SANKEY_NODE_PAD = 0.02

# Stream graph year windows: label → (first, last) inclusive
STREAM_YEAR_WINDOWS = {
    "All": (2001, 2015),
    "2001-2005": (2001, 2005),
    "2006-2010": (2006, 2010),
    "2011-2015": (2011, 2015),
}
DEFAULT_STREAM_WINDOW = "All"

# ── Timing ───────────────────────────────────────────────────────────────
RESIZE_DEBOUNCE_MS = 200
FETCH_TIMEOUT_S = 30.0
LARGE_FILE_BYTES = 100 * 1024 * 1024

# ── Font family fallback chain ───────────────────────────────────────────
FONT_FAMILIES = [
    "Segoe UI", "DejaVu Sans", "Liberation Sans", "Noto Sans",
    "Helvetica", "Arial", "sans-serif",
]

# ── Dark GUI colour palette ──────────────────────────────────────────────
DARK_COLORS = {
    'bg':           '#1e1e2e',
    'bg_alt':       '#252536',
    'bg_widget':    '#2a2a3c',
    'bg_input':     '#333348',
    'fg':           '#cdd6f4',
    'fg_dim':       '#9399b2',
    'accent':       '#89b4fa',
    'accent_hover': '#74c7ec',
    'green':        '#a6e3a1',
    'yellow':       '#f9e2af',
    'red':          '#f38ba8',
    'border':       '#45475a',
    'selection':    '#45475a',
}

# ── Chart palettes ───────────────────────────────────────────────────────
# Paint colour of each canonical car colour.
CAR_COLOR_HEX = {
    "white":  "#FFFFFF",
    "silver": "#C0C0C0",
    "black":  "#000000",
    "red":    "#FF0000",
    "blue":   "#1E90FF",
    "brown":  "#5D0000",
    "purple": "#8235CA",
    "yellow": "#FFFF00",
    "green":  "#008000",
    "orange": "#FFA500",
    "pink":   "#FFC0CB",
}

TRANSMISSION_HEX = {
    "manual":    "#1f77b4",
    "automatic": "#ff7f0e",
}

# Dark red → light red, PhD first
EDUCATION_HEX = {
    "PhD":         "#8B0000",
    "Master's":    "#FF6347",
    "Bachelor's":  "#FFA07A",
    "High School": "#FFDAB9",
}

CGPA_HEX = {
    "0 - 1.99":    "#e41a1c",
    "2.00 - 2.49": "#377eb8",
    "2.50 - 2.99": "#4daf4a",
    "3.00 - 3.49": "#984ea3",
    "3.50 - 4.00": "#ff7f00",
}

# Tableau-10 cycle for charts coloured by arbitrary categories
CATEGORY_CYCLE = [
    '#4e79a7', '#f28e2c', '#e15759', '#76b7b2', '#59a14f',
    '#edc949', '#af7aa1', '#ff9da7', '#9c755f', '#bab0ab',
]

SELECTION_EDGE = '#f9e2af'
HEATMAP_CMAP = 'Blues'

# ── Export / light-theme text colours ────────────────────────────────────
EXPORT_TEXT_COLOR = '#333333'

# ── Export settings ──────────────────────────────────────────────────────
EXPORT_DPI = 300
EXPORT_WIDTH_INCHES = 8.0
CLIPBOARD_DPI = 150

# ── Matplotlib dark-theme style dict (GUI preview) ──────────────────────
PLOT_STYLE_DARK = {
    'figure.facecolor':  DARK_COLORS['bg_alt'],
    'axes.facecolor':    DARK_COLORS['bg_widget'],
    'axes.edgecolor':    DARK_COLORS['border'],
    'axes.labelcolor':   DARK_COLORS['fg'],
    'text.color':        DARK_COLORS['fg'],
    'xtick.color':       DARK_COLORS['fg_dim'],
    'ytick.color':       DARK_COLORS['fg_dim'],
    'xtick.labelsize':   7,
    'ytick.labelsize':   7,
    'axes.labelsize':    8,
    'axes.titlesize':    10,
    'legend.fontsize':   6.5,
    'grid.color':        DARK_COLORS['border'],
    'legend.facecolor':  DARK_COLORS['bg_widget'],
    'legend.edgecolor':  DARK_COLORS['border'],
}

# ── Matplotlib light-theme style dict (export) ──────────────────────────
PLOT_STYLE_LIGHT = {
    'figure.facecolor':  '#ffffff',
    'axes.facecolor':    '#ffffff',
    'axes.edgecolor':    '#333333',
    'axes.labelcolor':   '#1a1a2e',
    'text.color':        '#1a1a2e',
    'xtick.color':       '#333333',
    'ytick.color':       '#333333',
    'xtick.labelsize':   7,
    'ytick.labelsize':   7,
    'axes.labelsize':    8,
    'axes.titlesize':    10,
    'legend.fontsize':   6.5,
    'grid.color':        '#cccccc',
    'legend.facecolor':  '#ffffff',
    'legend.edgecolor':  '#999999',
}
