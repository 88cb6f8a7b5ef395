import os
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# Storage
DATABASE_URL = os.getenv('DATABASE_URL', 'sqlite:///finance_tracker.db')

# Server
HOST = os.getenv('HOST', '127.0.0.1')
PORT = os.getenv('PORT', '3000')

# Logging
LOG_LEVELS = ('CRITICAL', 'ERROR', 'WARNING', 'INFO', 'DEBUG')
LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO').upper()

# Demo account
SEED_DEMO = os.getenv('SEED_DEMO', 'false').strip().lower() in ('1', 'true', 'yes', 'on')
DEMO_PASSWORD_HASH = os.getenv('DEMO_PASSWORD_HASH', '!')

# Validate environment variables
if not DATABASE_URL:
    raise ValueError("DATABASE_URL is set but empty in the environment (.env)")
if LOG_LEVEL not in LOG_LEVELS:
    raise ValueError(f"LOG_LEVEL '{LOG_LEVEL}' is not a logging level name")
try:
    PORT = int(PORT)
except ValueError:
    raise ValueError(f"PORT must be an integer, got '{PORT}'") from None
