from pathlib import Path

# === Base project path ===
PROJECT_ROOT = Path(__file__).resolve().parents[1]

# === Common directories ===
DATA_DIR = PROJECT_ROOT / "data"
CONFIG_DIR = PROJECT_ROOT / "config"
LOG_DIR = PROJECT_ROOT  # or change to PROJECT_ROOT / "logs" in future

# === Default file paths ===
LOG_PATH = LOG_DIR / "roster_run.log"
CONSTANTS_PATH = CONFIG_DIR / "constants.json"
WORKSPACE_PATH = DATA_DIR / "workspace.json"
