#!/usr/bin/env python3
"""Run the MT103 payment simulator.

Examples::

    # Three banks over a local Kafka broker, stop with ENTER
    python scripts/run_simulation.py --bootstrap-servers localhost:9092

    # Offline run with the in-process broker for 30 seconds
    python scripts/run_simulation.py --broker memory --rate-min 0.2 --rate-max 1 --duration 30
"""

import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from mt103_sim.cli import main

if __name__ == "__main__":
    sys.exit(main())
