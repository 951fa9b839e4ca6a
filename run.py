#!/usr/bin/env python3
"""
run.py - Main entry point for the gomoku game

Examples:
    python run.py play --mode ai
    python run.py play --mode twoPlayers
    python run.py analyze --position "......./......./......./...X.../......./......./......."
    python run.py benchmark --iterations 500
"""

import os
import sys

# Add the project root to Python path to ensure imports work
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from gomoku.interfaces.cli import main


if __name__ == "__main__":
    sys.exit(main())
