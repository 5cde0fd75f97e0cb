"""Runtime settings read from environment variables.

Values are resolved once at import time; tests override behaviour by passing
explicit arguments to the services rather than mutating these constants.
"""

import os

WRITE_DATABASE_URL = os.getenv("WRITE_DATABASE_URL", "sqlite:///meal_pool.db")
READ_DATABASE_URL = os.getenv("READ_DATABASE_URL", WRITE_DATABASE_URL)

# Generation tuning
GENERATION_RETRY_MULTIPLIER = int(os.getenv("GENERATION_RETRY_MULTIPLIER", "3"))
RECENT_MEAL_WINDOW = int(os.getenv("RECENT_MEAL_WINDOW", "2"))
OPTIONAL_COMPONENT_PROBABILITY = float(os.getenv("OPTIONAL_COMPONENT_PROBABILITY", "0.5"))
MAX_BATCH_QUANTITY = int(os.getenv("MAX_BATCH_QUANTITY", "50"))

# Rule resolution
MAX_FALLBACK_DEPTH = int(os.getenv("MAX_FALLBACK_DEPTH", "5"))
GLOBAL_DEFAULT_COUNTRY = "*"

LOG_DIR = os.getenv("LOG_DIR", os.path.join(os.path.dirname(__file__), "..", "logs"))

INGREDIENTS_CSV = os.getenv("INGREDIENTS_CSV", "data/fixtures/ingredients.csv")
