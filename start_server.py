#!/usr/bin/env python3
"""
Lunchly Server Startup Script
Simple script to start the FastAPI server with proper configuration.
"""

import sys

from lunchly.config import settings
from lunchly.main import run_server

if __name__ == "__main__":
    print("🚀 Lunchly")
    print("=" * 50)
    print(f"📊 Server running on: http://localhost:{settings.port}")
    print(f"📚 API Documentation: http://localhost:{settings.port}/docs")
    print("💡 Press Ctrl+C to stop the server")
    print("=" * 50)

    try:
        run_server()
    except KeyboardInterrupt:
        print("\n🛑 Server stopped by user")
    except Exception as e:
        print(f"❌ Server error: {e}")
        sys.exit(1)
