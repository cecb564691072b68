"""
Notifications module - customer-facing messages.

This module handles:
- Notifier port
- Email delivery adapter
"""
