import logging
import os
import subprocess
import sys

logging.basicConfig(level=logging.INFO, format='%(asctime)s | %(levelname)s | %(name)s | %(message)s')
logger = logging.getLogger("TicketOps")

# Get PORT from environment, default to 8501
port = os.environ.get("PORT", "8501")

try:
    port_int = int(port)
except ValueError:
    logger.warning(f"Invalid PORT value: {port}, using 8501")
    port_int = 8501

cmd = [
    sys.executable, "-m", "streamlit", "run", "app.py",
    f"--server.port={port_int}",
    "--server.address=0.0.0.0",
    "--server.headless=true",
]

logger.info(f"Starting TicketOps console on port {port_int}: {' '.join(cmd)}")
subprocess.run(cmd)
