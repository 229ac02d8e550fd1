"""Core — pure logic with no IO: errors, credentials, pagination, sales stats.

Invariants:
    - Core never imports from infrastructure, api or models
"""
