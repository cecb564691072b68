"""
Payments module - payment processor integration.

This module handles:
- Stripe webhook signature verification
- Mapping checkout events to provisioning commands
"""
