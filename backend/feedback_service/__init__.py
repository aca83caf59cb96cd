"""Feedback alert server: collect feedback, email alerts, admin listing."""
