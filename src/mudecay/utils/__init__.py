"""Utility functions and tools used across the package.

**Core Utilities:**
- `logger`: Logging utilities and configuration
- `factory`: Generic factory pattern implementations
- `enums`: Enumerated observation categories shared across the project
- `stopwatch`: Wall and CPU time measurements
"""
