#!/usr/bin/env python3
"""chainAgent CLI entrypoint.

Usage:
    python main.py list
    python main.py evaluate "Review auth.go for security vulnerabilities"
    python main.py run "Review the payment module and add tests"
    python main.py run --chain code-reviewer,test-generator "Harden parser.py"
"""

import sys

from chainAgent.cli import main

if __name__ == "__main__":
    sys.exit(main())
