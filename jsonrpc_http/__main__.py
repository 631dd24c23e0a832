"""Allow running as `python -m jsonrpc_http`."""

import sys

from jsonrpc_http.cli import main

if __name__ == "__main__":
    sys.exit(main())
