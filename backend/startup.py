#!/usr/bin/env python3
"""
Startup script for Fellowship Connect
"""
import sys
import os
from pathlib import Path

# Make the fellowship package importable when run from any directory
backend_dir = Path(__file__).parent
sys.path.insert(0, str(backend_dir))

os.environ.setdefault("PYTHONPATH", str(backend_dir))

if __name__ == "__main__":
    import uvicorn

    port = int(os.environ.get("PORT", 8000))
    host = os.environ.get("HOST", "0.0.0.0")

    print(f"Starting Fellowship Connect on {host}:{port}")

    uvicorn.run(
        "fellowship.main:app",
        host=host,
        port=port,
        log_level="info",
        access_log=True,
        reload=False  # Production mode
    )
