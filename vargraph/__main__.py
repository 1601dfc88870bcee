"""Entry point for `python -m vargraph`.

Usage:
    python -m vargraph
    uv run python -m vargraph
"""

from __future__ import annotations

import asyncio

from vargraph.app import main

asyncio.run(main())
