#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Internal utilities for styledmark."""
