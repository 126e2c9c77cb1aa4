import os
from pathlib import Path

# Project root directory
PROJECT_ROOT = Path(__file__).parent

# Data directories
DATA_DIR = Path(os.environ.get("LIGHTSOUT_DATA_DIR", PROJECT_ROOT / "data"))
HISTORY_FILE = DATA_DIR / "history.json"

# Results directories
RESULTS_DIR = PROJECT_ROOT / "results"
RESULTS_VIZ_DIR = RESULTS_DIR / "visualizations"
RESULTS_LOGS_DIR = RESULTS_DIR / "logs"

# Board parameters
DEFAULT_GRID_SIZE = 5
MIN_GRID_SIZE = 1
MAX_GRID_SIZE = 15
LEGACY_GRID_SIZE = 5  # records saved before grid_size was stored

# Generator parameters
DIFFICULTY_FACTOR = 3  # random toggles per cell
DIFFICULTY_JITTER = 5

# History statistics
HISTOGRAM_TARGET_BINS = 10
OUTLIER_PERCENTILE = 90
OUTLIER_FACTOR = 1.5
HISTORY_PAGE_SIZE = 20

# Visualization settings
VIZ_DPI = 150
VIZ_FIGSIZE = (6, 6)
VIZ_HIST_FIGSIZE = (10, 5)

# Logging configuration
LOG_LEVEL = "INFO"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
