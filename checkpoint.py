"""
AMBER Checkpoint v1.0
Standalone checkpoint server. The engine runs the booth; MCP clients
attach through mcp_server.py.

Run:  python checkpoint.py [--shift SHIFT_2]
Open: http://localhost:8000/api/state
"""

import os
import sys
import logging
import uvicorn

# Ensure engine directory is on the path
ENGINE_DIR = os.path.dirname(os.path.abspath(__file__))
sys.path.insert(0, ENGINE_DIR)

from web.routes import app, init_game

PORT = 8000
HOST = "0.0.0.0"


def main():
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s %(message)s")

    shift = None
    if "--shift" in sys.argv:
        idx = sys.argv.index("--shift")
        if idx + 1 < len(sys.argv):
            shift = sys.argv[idx + 1]

    result = init_game(shift)
    if not result.get("success"):
        print(f"  {result['error']}")
        sys.exit(1)

    print("=" * 50)
    print("  AMBER Checkpoint v1.0")
    print("=" * 50)
    print(f"  Server: http://localhost:{PORT}")
    print(f"  Shift:  {result['shift']} ({result['subjects']} subjects)")
    print()
    print("  Connect an MCP client via mcp_server.py to drive the booth.")
    print("  Press Ctrl+C to stop.")
    print("=" * 50)
    print()

    # Start server (blocking)
    uvicorn.run(app, host=HOST, port=PORT, log_level="warning")


if __name__ == "__main__":
    main()
