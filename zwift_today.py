#!/usr/bin/env python3
"""
Zwift Today - Entry point script.

Download today's scheduled ride from intervals.icu as a Zwift .zwo file.

Usage:
    python zwift_today.py [options]

Examples:
    python zwift_today.py --output ~/Documents/Zwift/Workouts/123456/today.zwo
    python zwift_today.py --dry-run --verbose
"""

import sys
from zwift_today.main import main

if __name__ == '__main__':
    sys.exit(main())
