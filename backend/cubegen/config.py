import os
from dotenv import load_dotenv

# Load .env from project root
load_dotenv()

DEFAULT_TITLE = os.getenv("CUBEGEN_DEFAULT_TITLE", "Untitled Diagram")

# Layout defaults applied when a declaration omits geometry
NODE_WIDTH = float(os.getenv("CUBEGEN_NODE_WIDTH", "120"))
NODE_HEIGHT = float(os.getenv("CUBEGEN_NODE_HEIGHT", "80"))
GRID_SPACING_X = float(os.getenv("CUBEGEN_GRID_SPACING_X", "200"))
GRID_SPACING_Y = float(os.getenv("CUBEGEN_GRID_SPACING_Y", "150"))
GRID_COLUMNS = int(os.getenv("CUBEGEN_GRID_COLUMNS", "4"))

CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CUBEGEN_CORS_ORIGINS", "http://localhost:5173").split(",")
    if origin.strip()
]

LOG_LEVEL = os.getenv("CUBEGEN_LOG_LEVEL", "INFO").upper()
