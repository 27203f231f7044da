"""
Huddle - real-time multi-room chat with presence notifications
"""

__version__ = "1.0.0"
