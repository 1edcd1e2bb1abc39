"""Core simulation primitives (reactive containers, state records, physics).

Kept free of host and timing concerns so it can be driven by asyncio, a manual
clock in tests, or any other per-frame scheduler.
"""
