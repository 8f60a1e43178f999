"""
Configuration module for the Aura Stylist API
Contains logger setup and environment variables
"""

import os
import logging
from dotenv import load_dotenv

# Load environment variables
load_dotenv()


# -------------------------
# Logger Setup
# -------------------------
def setup_logger(
    name: str = __name__, log_file: str = "aura_stylist.log"
) -> logging.Logger:
    """
    Set up and return a logger with both file and console handlers

    Args:
        name: Logger name (usually __name__)
        log_file: Path to log file

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)
    logger.setLevel(logging.DEBUG)

    # Avoid adding duplicate handlers
    if logger.handlers:
        return logger

    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    file_handler = logging.FileHandler(log_file, mode="a")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(formatter)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.INFO)
    console_handler.setFormatter(formatter)

    logger.addHandler(file_handler)
    logger.addHandler(console_handler)

    return logger


LOG_FILE = os.getenv("LOG_FILE", "aura_stylist.log")

# Create the main application logger
logger = setup_logger("aura_stylist", LOG_FILE)

# -------------------------
# Environment Variables
# -------------------------

# supabase
SUPABASE_URL = os.getenv("SUPABASE_URL")
SUPABASE_KEY = os.getenv("SUPABASE_KEY")
SUPABASE_SERVICE_KEY = os.getenv("SUPABASE_SERVICE_KEY")

# AI gateway (OpenAI-compatible chat completions)
AI_GATEWAY_KEY = os.getenv("AI_GATEWAY_KEY")
AI_GATEWAY_URL = os.getenv(
    "AI_GATEWAY_URL", "https://ai.gateway.lovable.dev/v1/chat/completions"
)
AI_GATEWAY_MODEL = os.getenv("AI_GATEWAY_MODEL", "google/gemini-2.5-pro")
AI_MAX_RETRIES = int(os.getenv("AI_MAX_RETRIES", "2"))
AI_RETRY_DELAY_SECONDS = float(os.getenv("AI_RETRY_DELAY_SECONDS", "2.0"))
AI_TIMEOUT_SECONDS = float(os.getenv("AI_TIMEOUT_SECONDS", "120"))


# Log configuration status
logger.info("Configuration loaded successfully")
logger.debug(f"SUPABASE_URL configured: {bool(SUPABASE_URL)}")
logger.debug(f"SUPABASE_KEY configured: {bool(SUPABASE_KEY)}")
logger.debug(f"SUPABASE_SERVICE_KEY configured: {bool(SUPABASE_SERVICE_KEY)}")
logger.debug(f"AI_GATEWAY_KEY configured: {bool(AI_GATEWAY_KEY)}")
logger.debug(f"AI_GATEWAY_MODEL: {AI_GATEWAY_MODEL}")
