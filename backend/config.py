import os

from dotenv import load_dotenv

# Load .env from the working directory so local settings are picked up
load_dotenv()


class Config:
    HOST = os.environ.get("HOST", "0.0.0.0")
    PORT = int(os.environ.get("PORT", "3000"))
    DEBUG = os.environ.get("FLASK_DEBUG", "0") == "1"

    # "memory" or "mongo"
    TASK_STORE = os.environ.get("TASK_STORE", "memory").lower()
    SEED_SAMPLE_TASKS = os.environ.get("SEED_SAMPLE_TASKS", "1") == "1"

    MONGO_URI = os.environ.get("MONGO_URI", "mongodb://localhost:27017/?directConnection=true")
    MONGO_DB_NAME = os.environ.get("MONGO_DB_NAME", "taskdb")
    MONGO_SERVER_SELECTION_TIMEOUT_MS = int(os.environ.get("MONGO_SERVER_SELECTION_TIMEOUT_MS", "2000"))
    MONGO_CONNECT_RETRIES = int(os.environ.get("MONGO_CONNECT_RETRIES", "5"))
    MONGO_RETRY_DELAY = float(os.environ.get("MONGO_RETRY_DELAY", "1.0"))
    MONGO_RETRY_MAX_DELAY = float(os.environ.get("MONGO_RETRY_MAX_DELAY", "16.0"))

    CORS_ORIGINS = os.environ.get("CORS_ORIGINS", "*")
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()
