"""
REST API Configuration
Supports local development and production deployments
"""
import logging
import os

from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger("TicketOps")

# ============================================
# ENVIRONMENT DETECTION
# ============================================
# Set ENVIRONMENT to 'production' on the server, defaults to 'development'
ENVIRONMENT = os.getenv("ENVIRONMENT", "development")

# ============================================
# LOCAL DEVELOPMENT CONFIGURATION
# ============================================
LOCAL_API_CONFIG = {
    "base_url": os.getenv("TICKETOPS_API_URL", "http://localhost:5000/api"),
    "timeout": int(os.getenv("TICKETOPS_API_TIMEOUT", "30")),
    "verify_ssl": False,
}

# ============================================
# PRODUCTION CONFIGURATION
# ============================================
# The backend URL MUST be set via environment variables
PRODUCTION_API_CONFIG = {
    "base_url": os.getenv("TICKETOPS_API_URL", ""),
    "timeout": int(os.getenv("TICKETOPS_API_TIMEOUT", "30")),
    "verify_ssl": True,
}


def validate_api_config() -> dict:
    """Validate API configuration for the active environment."""
    issues = []
    config = API_CONFIG

    if not config.get("base_url"):
        issues.append("TICKETOPS_API_URL not configured")
    elif not config["base_url"].startswith(("http://", "https://")):
        issues.append("TICKETOPS_API_URL must start with http:// or https://")
    if config.get("timeout", 0) <= 0:
        issues.append("TICKETOPS_API_TIMEOUT must be a positive number of seconds")
    if ENVIRONMENT == "production" and config.get("base_url", "").startswith("http://"):
        issues.append("Production backend should be served over https")

    return {"valid": len(issues) == 0, "issues": issues, "environment": ENVIRONMENT}


# ============================================
# ACTIVE CONFIGURATION
# ============================================
if ENVIRONMENT == "production":
    API_CONFIG = PRODUCTION_API_CONFIG
else:
    API_CONFIG = LOCAL_API_CONFIG

logger.info(f"[CONFIG] Environment: {ENVIRONMENT}")
logger.info(f"[CONFIG] API URL: {API_CONFIG.get('base_url') or 'NOT SET'}")
logger.info(f"[CONFIG] API Timeout: {API_CONFIG.get('timeout')}s")
