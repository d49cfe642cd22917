"""Delivery surfaces: HTTP app and Lambda handler."""
