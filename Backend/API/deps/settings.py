import os
from dotenv import load_dotenv

load_dotenv()

DB_DSN = os.getenv("DB_DSN")
ROUND_STORE = os.getenv("ROUND_STORE", "sql" if DB_DSN else "memory").lower()
CORS_ORIGINS = [
    o.strip()
    for o in os.getenv("CORS_ORIGINS", "http://localhost:3000,http://localhost:3001").split(",")
    if o.strip()
]
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
