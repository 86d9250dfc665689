# src/swapi_film_analysis/utils/paths.py
from pathlib import Path

# This file is located at: project_root/src/swapi_film_analysis/utils/paths.py
PROJECT_ROOT = Path(__file__).resolve().parents[3]

LOG_DIR = PROJECT_ROOT / "logs"
LOG_FILE = LOG_DIR / "film_analysis.log"
RESULTS_DIR = PROJECT_ROOT / "results"
