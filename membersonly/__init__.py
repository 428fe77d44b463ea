"""
Members Only - A small membership-gated message board

Users sign up, log in, unlock member status with a shared secret,
and post short messages that only members can attribute.
"""

__version__ = "0.1.0"
__author__ = "Members Only Project"
